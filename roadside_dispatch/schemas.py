from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestStatus(str, Enum):
    SUBMITTED = "Submitted"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class ContactRole(str, Enum):
    MECHANIC = "mechanic"
    TOWING = "towing"
    EMERGENCY = "emergency"
    SUPPORT = "support"


class UserRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    OPERATOR = "operator"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class AssignmentStatus(str, Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Message(BaseModel):
    message: str


# ────────────────────────────── REQUESTS ──────────────────────────────

class RequestOut(CamelModel):
    id: int
    user_info: Optional[str] = Field(default=None, alias="userInfo")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    status: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class RequestCreated(RequestOut):
    message: str = "Request created successfully"


class RequestView(RequestOut):
    contact_name: Optional[str] = Field(default=None, alias="contactName")
    contact_role: Optional[str] = Field(default=None, alias="contactRole")
    user_name: Optional[str] = Field(default=None, alias="userName")


class StatusUpdate(BaseModel):
    status: Optional[str] = None


# ────────────────────────────── CONTACTS ──────────────────────────────

class ContactIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class ContactOut(ContactIn, CamelModel):
    id: int
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class ContactCreated(ContactOut):
    message: str = "Contact created successfully"


# ────────────────────────────── USERS ──────────────────────────────

class UserIn(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None


class UserOut(UserIn, CamelModel):
    id: int
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class UserCreated(UserOut):
    message: str = "User created successfully"


# ────────────────────────────── ADMINS ──────────────────────────────

class AdminIn(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    level: Optional[str] = None
    status: Optional[str] = None


class AdminOut(AdminIn, CamelModel):
    id: int
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class AdminCreated(AdminOut):
    message: str = "Admin created successfully"


# ────────────────────────────── ASSIGNMENTS ──────────────────────────────

class AssignmentIn(CamelModel):
    request_id: int = Field(alias="requestId")
    contact_id: int = Field(alias="contactId")
    user_id: int = Field(alias="userId")
    status: Optional[str] = AssignmentStatus.ASSIGNED.value


class AssignmentView(CamelModel):
    id: int
    request_id: Optional[int] = Field(default=None, alias="requestId")
    contact_id: Optional[int] = Field(default=None, alias="contactId")
    user_id: Optional[int] = Field(default=None, alias="userId")
    status: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    user_info: Optional[str] = Field(default=None, alias="userInfo")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    request_status: Optional[str] = Field(default=None, alias="requestStatus")
    contact_name: Optional[str] = Field(default=None, alias="contactName")
    contact_role: Optional[str] = Field(default=None, alias="contactRole")
    user_name: Optional[str] = Field(default=None, alias="userName")
