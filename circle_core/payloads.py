from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .catalog import GroupType
from .errors import FormValidationError
from .form import FormState
from .validation import validate_form


class GroupRequestBase(BaseModel):
    """Fields shared by public and private creation requests."""

    group_name: str
    description: str
    max_members: str
    contribution_amount: str
    cycle_duration: str
    cycle_unit: str
    lock_enabled: bool
    lock_amount: str
    selected_token: str
    min_reputation: str

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel

    def to_params(self) -> Dict[str, Any]:
        """Parameters handed to the submission client, without the tag."""
        return self.model_dump(by_alias=True, exclude={"group_type"})


class PublicGroupRequest(GroupRequestBase):
    group_type: Literal[GroupType.PUBLIC] = GroupType.PUBLIC


class PrivateGroupRequest(GroupRequestBase):
    group_type: Literal[GroupType.PRIVATE] = GroupType.PRIVATE
    invited_members: List[str]


GroupCreationRequest = Annotated[
    Union[PublicGroupRequest, PrivateGroupRequest],
    Field(discriminator="group_type"),
]


def build_request(form: FormState) -> Union[PublicGroupRequest, PrivateGroupRequest]:
    """
    Build the creation request for a form.

    The request type is chosen from the form's group type only. Public
    requests never carry the invitee list, whatever the form holds.

    Raises:
        FormValidationError: the form breaks one of the validation rules.
    """
    result = validate_form(form)
    if not result.ok:
        raise FormValidationError(result.error)

    fields = dict(
        group_name=form.data.group_name,
        description=form.data.description,
        max_members=form.data.max_members,
        contribution_amount=form.data.contribution_amount,
        cycle_duration=form.data.cycle_duration,
        cycle_unit=form.data.cycle_unit,
        lock_enabled=form.lock.lock_enabled,
        lock_amount=form.lock.lock_amount,
        selected_token=form.selected_token,
        min_reputation=form.data.min_reputation,
    )

    if form.group_type == GroupType.PRIVATE:
        return PrivateGroupRequest(
            invited_members=list(form.invited_members), **fields
        )
    return PublicGroupRequest(**fields)
