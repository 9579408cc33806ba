from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import datetime
from typing import Optional

from circle_core.catalog import GroupType


class GroupCreation(SQLModel, table=True):
    """Savings group created through the ledger, shown in the group listing."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    group_type: GroupType = Field(index=True)
    group_name: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)

    # Group settings
    max_members: int
    contribution_amount: str = Field(max_length=78)
    cycle_duration: int
    cycle_unit: str = Field(max_length=20)
    token: str = Field(max_length=10)
    lock_enabled: bool = Field(default=False)
    invited_count: int = Field(default=0)

    # Ledger
    creator_address: str = Field(max_length=66, index=True)
    transaction_hash: str = Field(max_length=66, unique=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
