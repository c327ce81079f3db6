"""Models package: import all models so metadata.create_all can discover them."""

from netadmin.models.account import Account, AccountGroup
from netadmin.models.group import Group
from netadmin.models.router import Router, RouterGroupViewer, RouterGroupEditor
from netadmin.models.vpn import Vpn
from netadmin.models.user import User
from netadmin.models.department import Department
from netadmin.models.mail import Mail
from netadmin.models.mail_group import MailGroup, MailMailGroup
from netadmin.models.setting import Setting
from netadmin.models.audit_log import AuditLog

__all__ = [
    "Account", "AccountGroup", "Group",
    "Router", "RouterGroupViewer", "RouterGroupEditor",
    "Vpn", "User", "Department", "Mail", "MailGroup", "MailMailGroup",
    "Setting", "AuditLog",
]
