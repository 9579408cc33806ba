from datetime import datetime
from uuid import UUID
from typing import Optional
from pydantic import BaseModel

from circle_core.builder import Notification, OutcomeKind
from circle_core.catalog import GroupType
from circle_core.form import FormData, LockSettings
from circle_core.validation import FieldError


class DraftResponse(BaseModel):
    """Create-group form in progress."""

    id: UUID
    group_type: GroupType
    data: FormData
    lock: LockSettings
    selected_token: str
    invited_members: list[str]
    current_address: str
    status: str
    is_creating: bool
    is_connected: bool


class FieldUpdate(BaseModel):
    name: str
    value: str


class GroupTypeUpdate(BaseModel):
    group_type: GroupType


class LockUpdate(BaseModel):
    lock_enabled: bool
    lock_amount: Optional[str] = None


class TokenUpdate(BaseModel):
    selected_token: str


class MemberAdd(BaseModel):
    """Invitee to add. Falls back to the staged address when omitted."""

    address: Optional[str] = None


class StagedAddressUpdate(BaseModel):
    address: str


class ValidationResponse(BaseModel):
    valid: bool
    error: Optional[FieldError] = None


class TokenResponse(BaseModel):
    value: str
    label: str
    icon: str


class SubmissionResponse(BaseModel):
    """Successful group creation."""

    kind: OutcomeKind
    transaction_hash: str
    notifications: list[Notification]
    redirect_to: str
    redirect_after_ms: int


class GroupCreationResponse(BaseModel):
    """Group listing entry."""

    id: UUID
    group_type: GroupType
    group_name: str
    description: Optional[str]
    max_members: int
    contribution_amount: str
    cycle_duration: int
    cycle_unit: str
    token: str
    lock_enabled: bool
    invited_count: int
    creator_address: str
    transaction_hash: str
    created_at: datetime

    class Config:
        from_attributes = True
