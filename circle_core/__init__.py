# circle_core/__init__.py

from .catalog import SUPPORTED_TOKENS, CycleUnit, GroupType
from .form import FormState
from .validation import FieldError, ValidationResult, validate_form
from .payloads import (
    GroupCreationRequest,
    PrivateGroupRequest,
    PublicGroupRequest,
    build_request,
)
from .builder import GroupRequestBuilder, Notification, SubmissionOutcome

__all__ = [
    "SUPPORTED_TOKENS",
    "CycleUnit",
    "GroupType",
    "FormState",
    "FieldError",
    "ValidationResult",
    "validate_form",
    "GroupCreationRequest",
    "PrivateGroupRequest",
    "PublicGroupRequest",
    "build_request",
    "GroupRequestBuilder",
    "Notification",
    "SubmissionOutcome",
]
