"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

# bcrypt only looks at the first 72 bytes and rejects longer input
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password cannot be longer than {PASSWORD_MAX_BYTES} bytes")
    return v


# ---- Security ----
class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=72)


class AccountGroupOut(BaseModel):
    id: int
    account_id: int
    group_id: int

    class Config:
        from_attributes = True


class AccountOut(BaseModel):
    id: int
    username: str
    fullname: str = ""
    title: str = ""
    admin: int = 0
    disabled: int = 0
    deleted: int = 0
    account_groups: List[AccountGroupOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    account: AccountOut


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=72)
    fullname: str = ""
    title: str = ""
    admin: int = Field(0, ge=0, le=1)
    disabled: int = Field(0, ge=0, le=1)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: Optional[str]) -> Optional[str]:
        return _check_password_bytes(v)


class AccountUpdate(BaseModel):
    id: int
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1, max_length=72)
    fullname: Optional[str] = None
    title: Optional[str] = None
    admin: Optional[int] = Field(None, ge=0, le=1)
    disabled: Optional[int] = Field(None, ge=0, le=1)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: Optional[str]) -> Optional[str]:
        return _check_password_bytes(v)


class IdRequest(BaseModel):
    id: int


# ---- Group ----
class GroupOut(BaseModel):
    id: int
    name: str
    title: str = ""
    access_routers: int = 0
    access_users: int = 0
    access_departments: int = 0
    access_mails: int = 0
    deleted: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = ""
    access_routers: int = Field(0, ge=0, le=2)
    access_users: int = Field(0, ge=0, le=2)
    access_departments: int = Field(0, ge=0, le=2)
    access_mails: int = Field(0, ge=0, le=2)


class GroupUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = None
    access_routers: Optional[int] = Field(None, ge=0, le=2)
    access_users: Optional[int] = Field(None, ge=0, le=2)
    access_departments: Optional[int] = Field(None, ge=0, le=2)
    access_mails: Optional[int] = Field(None, ge=0, le=2)


class AccountGroupRequest(BaseModel):
    account_id: int
    group_id: int


# ---- Router ----
class RouterGroupOut(BaseModel):
    id: int
    router_id: int
    group_id: int

    class Config:
        from_attributes = True


class RouterOut(BaseModel):
    id: int
    name: str = ""
    title: str = ""
    login: str = ""
    local_address: str = ""
    remote_address: str = ""
    default_profile: str = ""
    disabled: int = 0
    deleted: int = 0
    group_viewers: List[RouterGroupOut] = []
    group_editors: List[RouterGroupOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RouterCreate(BaseModel):
    name: str = ""
    title: str = ""
    login: str = ""
    password: str = ""
    local_address: str = ""
    remote_address: str = ""
    default_profile: str = ""
    l2tp_key: str = ""
    disabled: int = Field(0, ge=0, le=1)


class RouterUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    title: Optional[str] = None
    login: Optional[str] = None
    password: Optional[str] = None
    local_address: Optional[str] = None
    remote_address: Optional[str] = None
    default_profile: Optional[str] = None
    l2tp_key: Optional[str] = None
    disabled: Optional[int] = Field(None, ge=0, le=1)


class RouterGroupRequest(BaseModel):
    router_id: int
    group_id: int


# ---- VPN ----
class VpnOut(BaseModel):
    id: int
    name: str
    profile: str = ""
    remote_address: str = ""
    service: str = ""
    title: str = ""
    vpn_id: Optional[str] = None
    router_id: int
    user_id: Optional[int] = None
    disabled: int = 0
    deleted: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VpnCreate(BaseModel):
    router_id: int
    name: str = Field(..., min_length=1)
    password: str = ""
    profile: str = ""
    remote_address: str = ""
    service: str = "any"
    title: str = ""
    user_id: Optional[int] = None
    disabled: int = Field(0, ge=0, le=1)


class VpnUpdate(BaseModel):
    """VPN changes. Moving a VPN to another router is not allowed."""
    id: int
    name: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = None
    profile: Optional[str] = None
    remote_address: Optional[str] = None
    service: Optional[str] = None
    title: Optional[str] = None
    user_id: Optional[int] = None
    disabled: Optional[int] = Field(None, ge=0, le=1)


# ---- Directory ----
class UserOut(BaseModel):
    id: int
    surname: str = ""
    name: str = ""
    patronymic: str = ""
    fullname: str = ""
    title: str = ""
    login: str = ""
    department_id: Optional[int] = None
    disabled: int = 0
    deleted: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    surname: str = ""
    name: str = ""
    patronymic: str = ""
    fullname: str = ""
    title: str = ""
    login: str = ""
    department_id: Optional[int] = None
    disabled: int = Field(0, ge=0, le=1)


class UserUpdate(BaseModel):
    id: int
    surname: Optional[str] = None
    name: Optional[str] = None
    patronymic: Optional[str] = None
    fullname: Optional[str] = None
    title: Optional[str] = None
    login: Optional[str] = None
    department_id: Optional[int] = None
    disabled: Optional[int] = Field(None, ge=0, le=1)


class DepartmentOut(BaseModel):
    id: int
    name: str
    title: str = ""
    deleted: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = ""


class DepartmentUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = None


class MailOut(BaseModel):
    id: int
    nickname: str
    name_first: str = ""
    name_last: str = ""
    name_middle: str = ""
    position: str = ""
    is_admin: int = 0
    is_enabled: int = 1
    user_id: Optional[int] = None
    deleted: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MailCreate(BaseModel):
    nickname: str = Field(..., min_length=1)
    name_first: str = ""
    name_last: str = ""
    name_middle: str = ""
    position: str = ""
    is_admin: int = Field(0, ge=0, le=1)
    is_enabled: int = Field(1, ge=0, le=1)
    user_id: Optional[int] = None


class MailUpdate(BaseModel):
    id: int
    nickname: Optional[str] = Field(None, min_length=1)
    name_first: Optional[str] = None
    name_last: Optional[str] = None
    name_middle: Optional[str] = None
    position: Optional[str] = None
    is_admin: Optional[int] = Field(None, ge=0, le=1)
    is_enabled: Optional[int] = Field(None, ge=0, le=1)
    user_id: Optional[int] = None


# ---- Mail groups ----
class MailMailGroupOut(BaseModel):
    id: int
    mail_id: int
    mail_group_id: int

    class Config:
        from_attributes = True


class MailGroupOut(BaseModel):
    id: int
    mail_group_id: Optional[str] = None
    name: str
    description: str = ""
    label: str = ""
    deleted: int = 0
    members: List[MailMailGroupOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MailGroupCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    label: str = ""
    mail_group_id: Optional[str] = None


class MailGroupUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    label: Optional[str] = None
    mail_group_id: Optional[str] = None


class MailMailGroupRequest(BaseModel):
    mail_id: int
    mail_group_id: int


# ---- Settings / Audit ----
class SettingOut(BaseModel):
    key: str
    value: Optional[str] = None

    class Config:
        from_attributes = True


class SettingUpdate(BaseModel):
    key: str = Field(..., min_length=1)
    value: Optional[str] = None


class AuditLogOut(BaseModel):
    id: int
    action: str
    new_value_json: Optional[str] = None
    initiator_id: int
    account_id: Optional[int] = None
    group_id: Optional[int] = None
    router_id: Optional[int] = None
    vpn_id: Optional[int] = None
    user_id: Optional[int] = None
    department_id: Optional[int] = None
    mail_id: Optional[int] = None
    mail_group_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
