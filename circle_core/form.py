import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .catalog import (
    ADDRESS_PREFIX,
    DEFAULT_TOKEN,
    MIN_ADDRESS_LENGTH,
    CycleUnit,
    GroupType,
)
from .errors import InvalidAddress, UnknownFormField

logger = logging.getLogger(__name__)


class FormData(BaseModel):
    """Raw text entered in the create-group form."""

    group_name: str = ""
    description: str = ""
    max_members: str = ""
    contribution_amount: str = ""
    cycle_duration: str = "1"
    cycle_unit: str = CycleUnit.DAYS.value
    min_reputation: str = "0"


class LockSettings(BaseModel):
    lock_enabled: bool = False
    lock_amount: str = ""


class FormState(BaseModel):
    """
    Mutable state of a single create-group form.

    Nothing here is validated except the shape of invitee addresses;
    the whole form is checked at submission time.
    """

    group_type: GroupType = GroupType.PUBLIC
    data: FormData = Field(default_factory=FormData)
    lock: LockSettings = Field(default_factory=LockSettings)
    selected_token: str = DEFAULT_TOKEN
    invited_members: List[str] = Field(default_factory=list)
    current_address: str = ""

    def set_field(self, name: str, value: Any) -> None:
        """Update one form field by key. Values are stored as text."""
        if name not in FormData.model_fields:
            raise UnknownFormField(name)
        setattr(self.data, name, "" if value is None else str(value))

    def set_group_type(self, group_type: Union[GroupType, str]) -> None:
        # Other fields are kept, max_members may now exceed the new ceiling
        self.group_type = GroupType(group_type)

    def set_current_address(self, value: str) -> None:
        self.current_address = value

    def add_invited_member(self, candidate: Optional[str] = None) -> bool:
        """
        Add an invitee address, defaulting to the staging field.

        Returns:
            True if the address was appended, False if it was already invited.

        Raises:
            InvalidAddress: the candidate does not start with 0x or is too short.
                The list and the staging field are left as they were.
        """
        address = self.current_address if candidate is None else candidate

        if not is_valid_address(address):
            logger.warning(f"Rejected invitee address: {address!r}")
            raise InvalidAddress(address)

        added = address not in self.invited_members
        if added:
            self.invited_members.append(address)
        self.current_address = ""
        return added

    def remove_invited_member(self, address: str) -> None:
        if address in self.invited_members:
            self.invited_members.remove(address)

    def set_lock(self, enabled: bool, amount: Optional[str] = None) -> None:
        self.lock.lock_enabled = enabled
        if amount is not None:
            self.lock.lock_amount = str(amount)

    def set_token(self, key: str) -> None:
        self.selected_token = key

    def snapshot(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


def is_valid_address(address: Optional[str]) -> bool:
    """Check the syntactic shape of a chain address."""
    if not address:
        return False
    return address.startswith(ADDRESS_PREFIX) and len(address) >= MIN_ADDRESS_LENGTH
