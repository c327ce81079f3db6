"""Router ACL lookups and grants."""

from typing import Dict, Optional, Type, Union

from sqlalchemy.orm import Session

from netadmin.core.exceptions import ResourceConflictError, ResourceNotFoundError
from netadmin.core.policy import ResourceAcl
from netadmin.models.group import Group
from netadmin.models.router import Router, RouterGroupEditor, RouterGroupViewer
from netadmin.models.vpn import Vpn

RouterGroupModel = Type[Union[RouterGroupViewer, RouterGroupEditor]]


class AclService:
    """Loads ACL snapshots for the policy engine and edits the ACL tables."""

    @staticmethod
    def router_acl(db: Session, router_id: int) -> Optional[ResourceAcl]:
        """ACL of a non-deleted router, or None when it does not exist."""
        router = db.query(Router).filter(Router.id == router_id, Router.deleted == 0).first()
        if router is None:
            return None
        return ResourceAcl(
            resource_id=router.id,
            viewer_group_ids=frozenset(row.group_id for row in router.group_viewers),
            editor_group_ids=frozenset(row.group_id for row in router.group_editors),
        )

    @staticmethod
    def vpn_router_acl(db: Session, vpn_id: int) -> Optional[ResourceAcl]:
        """ACL of the router a non-deleted VPN lives on."""
        vpn = db.query(Vpn).filter(Vpn.id == vpn_id, Vpn.deleted == 0).first()
        if vpn is None:
            return None
        return AclService.router_acl(db, vpn.router_id)

    @staticmethod
    def grant(db: Session, model: RouterGroupModel, router_id: int, group_id: int):
        """Add a viewer or editor row for ``(router_id, group_id)``."""
        if not db.query(Router).filter(Router.id == router_id, Router.deleted == 0).first():
            raise ResourceNotFoundError(f"Router with ID {router_id} not found")
        if not db.query(Group).filter(Group.id == group_id, Group.deleted == 0).first():
            raise ResourceNotFoundError(f"Group with ID {group_id} not found")
        if AclService._find(db, model, router_id, group_id):
            raise ResourceConflictError(f"Group {group_id} is already assigned to router {router_id}")

        row = model(router_id=router_id, group_id=group_id)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def revoke(db: Session, model: RouterGroupModel, router_id: int, group_id: int) -> Dict[str, int]:
        """Delete a viewer or editor row. Returns the removed row's values."""
        row = AclService._find(db, model, router_id, group_id)
        if not row:
            raise ResourceNotFoundError(f"Group {group_id} is not assigned to router {router_id}")
        removed = {"id": row.id, "router_id": row.router_id, "group_id": row.group_id}
        db.delete(row)
        db.commit()
        return removed

    @staticmethod
    def _find(db: Session, model: RouterGroupModel, router_id: int, group_id: int):
        return (
            db.query(model)
            .filter(model.router_id == router_id, model.group_id == group_id)
            .first()
        )


acl_service = AclService()
