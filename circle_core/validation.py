import logging
import re
from decimal import Decimal
from typing import Callable, List, Optional

from pydantic import BaseModel

from .catalog import (
    MAX_MEMBERS,
    MIN_CYCLE_DURATION,
    MIN_MEMBERS,
    SUPPORTED_TOKENS,
    CycleUnit,
    GroupType,
    cycle_unit_values,
)
from .form import FormState

logger = logging.getLogger(__name__)


class FieldError(BaseModel):
    """First rule a form broke."""

    field: str
    message: str
    title: str = "Error"


class ValidationResult(BaseModel):
    error: Optional[FieldError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# Plain ASCII numbers only: no digit separators, exponents or other scripts
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")


def parse_int(value: str) -> Optional[int]:
    if not isinstance(value, str) or not INTEGER_PATTERN.fullmatch(value.strip()):
        return None
    return int(value.strip())


def parse_decimal(value: str) -> Optional[Decimal]:
    if not isinstance(value, str) or not DECIMAL_PATTERN.fullmatch(value.strip()):
        return None
    return Decimal(value.strip())


def check_group_name(form: FormState) -> Optional[FieldError]:
    if not form.data.group_name.strip():
        return FieldError(field="group_name", message="Group name is required")
    return None


def check_min_members(form: FormState) -> Optional[FieldError]:
    members = parse_int(form.data.max_members)
    if members is None or members < MIN_MEMBERS:
        return FieldError(field="max_members", message="Minimum 2 members required")
    return None


def check_max_members(form: FormState) -> Optional[FieldError]:
    ceiling = MAX_MEMBERS[form.group_type]
    members = parse_int(form.data.max_members)
    if members is not None and members > ceiling:
        return FieldError(
            field="max_members",
            message=f"Maximum {ceiling} members for {form.group_type.value} groups",
        )
    return None


def check_contribution(form: FormState) -> Optional[FieldError]:
    amount = parse_decimal(form.data.contribution_amount)
    if amount is None or amount <= 0:
        return FieldError(
            field="contribution_amount",
            message="Valid contribution amount is required",
        )
    return None


def check_cycle_duration(form: FormState) -> Optional[FieldError]:
    duration = parse_int(form.data.cycle_duration)
    if duration is None or duration < MIN_CYCLE_DURATION:
        return FieldError(
            field="cycle_duration", message="Cycle duration must be at least 1"
        )
    return None


def check_cycle_unit(form: FormState) -> Optional[FieldError]:
    unit = form.data.cycle_unit
    if not unit:
        return FieldError(field="cycle_unit", message="Cycle unit is required")
    if unit not in cycle_unit_values():
        return FieldError(
            field="cycle_unit",
            message=f"Cycle unit must be one of {', '.join(u.value for u in CycleUnit)}",
        )
    return None


def check_invitations(form: FormState) -> Optional[FieldError]:
    if form.group_type == GroupType.PRIVATE and not form.invited_members:
        return FieldError(
            field="invited_members",
            title="Missing invitations",
            message="Please invite at least one member to your private group.",
        )
    return None


def check_lock_amount(form: FormState) -> Optional[FieldError]:
    # An empty amount is passed through untouched
    if not form.lock.lock_enabled or not form.lock.lock_amount:
        return None
    amount = parse_decimal(form.lock.lock_amount)
    if amount is None or amount < 0:
        return FieldError(
            field="lock_amount", message="Lock amount must be zero or greater"
        )
    return None


def check_token(form: FormState) -> Optional[FieldError]:
    if form.selected_token not in SUPPORTED_TOKENS:
        return FieldError(field="selected_token", message="Unsupported token")
    return None


# Order matters: the first failing rule is reported
RULES: List[Callable[[FormState], Optional[FieldError]]] = [
    check_group_name,
    check_min_members,
    check_max_members,
    check_contribution,
    check_cycle_duration,
    check_cycle_unit,
    check_invitations,
    check_lock_amount,
    check_token,
]


def validate_form(form: FormState) -> ValidationResult:
    """Run every rule against the form and stop at the first failure."""
    for rule in RULES:
        error = rule(form)
        if error is not None:
            logger.info(f"Form rejected on {error.field}: {error.message}")
            return ValidationResult(error=error)
    return ValidationResult()
