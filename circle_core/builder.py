import asyncio
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from pydantic import BaseModel

from .catalog import DEFAULT_LISTING_PATH, DEFAULT_REDIRECT_DELAY_MS
from .errors import FormAlreadySubmitted, NotConnected, SubmissionInProgress
from .form import FormState
from .payloads import PrivateGroupRequest, PublicGroupRequest, build_request
from .validation import FieldError, ValidationResult, validate_form

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to create group. Please try again."


class GroupContract(Protocol):
    """Wallet session and submission client for group creation."""

    is_connected: bool
    account: Optional[str]

    async def create_public_group(self, params: Dict[str, Any]) -> Mapping[str, Any]:
        ...

    async def create_private_group(self, params: Dict[str, Any]) -> Mapping[str, Any]:
        ...

    def reset_state(self) -> None:
        ...


class Notification(BaseModel):
    title: str
    description: str
    variant: str = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class Navigator(Protocol):
    def navigate_to(self, path: str) -> None:
        ...


class SubmissionStatus(str, Enum):
    """Lifecycle of a single form's submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    NOT_CONNECTED = "not_connected"
    REJECTED = "rejected"


class SubmissionOutcome(BaseModel):
    """Result of a creation attempt."""

    kind: OutcomeKind
    transaction_hash: Optional[str] = None
    message: Optional[str] = None
    error: Optional[FieldError] = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(cls, transaction_hash: str) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.SUCCESS, transaction_hash=transaction_hash)

    @classmethod
    def failure(cls, message: Optional[str] = None) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.FAILURE, message=message or GENERIC_FAILURE_MESSAGE)

    @classmethod
    def not_connected(cls) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.NOT_CONNECTED, message=NotConnected().message)

    @classmethod
    def rejected(cls, error: FieldError) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.REJECTED, message=error.message, error=error)


def _transaction_hash(result: Any) -> Optional[str]:
    if result is None:
        return None
    if isinstance(result, Mapping):
        return result.get("transaction_hash")
    return getattr(result, "transaction_hash", None)


class GroupRequestBuilder:
    """
    Validates a form, builds its creation request and submits it.

    One builder belongs to one form. It allows a single request in flight
    and refuses any further attempt once a group has been created.
    """

    def __init__(
        self,
        contract: GroupContract,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
        redirect_delay_ms: int = DEFAULT_REDIRECT_DELAY_MS,
        listing_path: str = DEFAULT_LISTING_PATH,
    ):
        self.contract = contract
        self.notifier = notifier
        self.navigator = navigator
        self.redirect_delay_ms = redirect_delay_ms
        self.listing_path = listing_path
        self.status = SubmissionStatus.IDLE
        self.pending_navigation: Optional[asyncio.TimerHandle] = None

    @property
    def is_creating(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING

    @property
    def is_connected(self) -> bool:
        return bool(self.contract.is_connected) and self.contract.account is not None

    def validate(self, form: FormState) -> ValidationResult:
        return validate_form(form)

    def build_request(
        self, form: FormState
    ) -> Union[PublicGroupRequest, PrivateGroupRequest]:
        return build_request(form)

    async def submit(
        self, request: Union[PublicGroupRequest, PrivateGroupRequest]
    ) -> SubmissionOutcome:
        """Hand a built request to the contract and interpret the answer."""
        if not self.is_connected:
            logger.warning("Group creation attempted without a connected wallet")
            return SubmissionOutcome.not_connected()

        self.contract.reset_state()

        params = request.to_params()
        try:
            if isinstance(request, PrivateGroupRequest):
                result = await self.contract.create_private_group(params)
            else:
                result = await self.contract.create_public_group(params)
        except Exception as e:
            logger.error(f"Error creating group: {e}")
            return SubmissionOutcome.failure(getattr(e, "message", None) or str(e))

        transaction_hash = _transaction_hash(result)
        if not transaction_hash:
            logger.error("Group creation returned no transaction hash")
            return SubmissionOutcome.failure()

        logger.info(
            f"Created {request.group_type.value} group '{request.group_name}' "
            f"in transaction {transaction_hash}"
        )
        return SubmissionOutcome.success(transaction_hash)

    async def create_group(self, form: FormState) -> SubmissionOutcome:
        """
        Run the whole creation flow for a form.

        Checks the wallet, validates, submits, then notifies the user and
        schedules navigation to the listing on success. The form itself is
        never modified, so a failed attempt can be corrected and retried.

        Raises:
            SubmissionInProgress: another attempt for this form is in flight.
            FormAlreadySubmitted: this form already created a group.
        """
        if self.status == SubmissionStatus.SUBMITTING:
            raise SubmissionInProgress()
        if self.status == SubmissionStatus.SUCCEEDED:
            raise FormAlreadySubmitted()

        self.status = SubmissionStatus.VALIDATING

        if not self.is_connected:
            self.status = SubmissionStatus.IDLE
            error = NotConnected()
            self._notify(error.title, error.message, "destructive")
            return SubmissionOutcome.not_connected()

        result = self.validate(form)
        if not result.ok:
            self.status = SubmissionStatus.IDLE
            self._notify(result.error.title, result.error.message, "destructive")
            return SubmissionOutcome.rejected(result.error)

        request = self.build_request(form)

        self.status = SubmissionStatus.SUBMITTING
        try:
            outcome = await self.submit(request)
        finally:
            self.status = SubmissionStatus.IDLE

        if not outcome.ok:
            self._notify("Error", outcome.message, "destructive")
            return outcome

        self.status = SubmissionStatus.SUCCEEDED
        self._notify(
            "Success!",
            f"Group created successfully! Transaction: {outcome.transaction_hash[:10]}...",
        )
        self._schedule_navigation()
        return outcome

    def _notify(self, title: str, description: str, variant: str = "default") -> None:
        if self.notifier is None:
            return
        self.notifier.notify(
            Notification(title=title, description=description, variant=variant)
        )

    def _schedule_navigation(self) -> None:
        if self.navigator is None:
            return
        loop = asyncio.get_running_loop()
        self.pending_navigation = loop.call_later(
            self.redirect_delay_ms / 1000,
            self.navigator.navigate_to,
            self.listing_path,
        )
