"""Departments API router."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Capability, Level, RequireCapability
from netadmin.db.session import get_db
from netadmin.models.department import Department
from netadmin.schemas.schemas import DepartmentCreate, DepartmentUpdate, DepartmentOut, IdRequest
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/db/department", tags=["departments"])

department_service = CrudService(Department, "Department")

can_view = RequireCapability(Capability.DEPARTMENTS, Level.VIEWER)
can_edit = RequireCapability(Capability.DEPARTMENTS, Level.EDITOR)


@router.get("")
async def get_departments(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_view),
):
    if entity_id is not None:
        return DepartmentOut.model_validate(department_service.get(db, entity_id))
    return [DepartmentOut.model_validate(d) for d in department_service.list(db)]


@router.post("", response_model=DepartmentOut)
async def create_department(
    body: DepartmentCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = DepartmentOut.model_validate(department_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        department_id=out.id,
    )
    return out


@router.put("", response_model=DepartmentOut)
async def update_department(
    body: DepartmentUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = DepartmentOut.model_validate(department_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        department_id=out.id,
    )
    return out


@router.delete("", response_model=DepartmentOut)
async def delete_department(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = DepartmentOut.model_validate(department_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        department_id=out.id,
    )
    return out
