from typing import Optional


class CircleError(Exception):
    """Base class for savings group errors."""

    title = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAddress(CircleError):
    """Raised when an invitee address does not look like a chain address."""

    title = "Invalid Address"

    def __init__(self, address: str):
        super().__init__(
            "Please enter a valid Starknet wallet address starting with 0x"
        )
        self.address = address


class UnknownFormField(CircleError):
    def __init__(self, name: str):
        super().__init__(f"Unknown form field: {name}")
        self.name = name


class FormValidationError(CircleError):
    """Raised when a request is built from a form that does not validate."""

    def __init__(self, error):
        super().__init__(error.message)
        self.error = error
        self.title = error.title


class NotConnected(CircleError):
    title = "Wallet Connection Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Please ensure your wallet is properly connected and try again."
        )


class SubmissionFailure(CircleError):
    """Raised by a submission client when the ledger rejects a request."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or "")
        self.status_code = status_code


class SubmissionBlocked(CircleError):
    pass


class SubmissionInProgress(SubmissionBlocked):
    def __init__(self):
        super().__init__("A group creation request is already in progress")


class FormAlreadySubmitted(SubmissionBlocked):
    def __init__(self):
        super().__init__("This group has already been created")
