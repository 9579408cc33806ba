import os

# Keep the service's database in memory while testing
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from circle_core.catalog import GroupType
from circle_core.form import FormState

WALLET = "0x04a1b2c3d4e5f60718293a4b5c6d7e8f"
INVITEE = "0x0123456789abcdef"


class FakeContract:
    """In-memory stand-in for the wallet session and ledger client."""

    def __init__(self, account=WALLET, result=None, error=None):
        self.account = account
        self.result = {"transaction_hash": "0xabc1234567890def"} if result is None else result
        self.error = error
        self.calls = []
        self.reset_calls = 0

    @property
    def is_connected(self):
        return self.account is not None

    def connect(self, account):
        self.account = account

    def disconnect(self):
        self.account = None

    def reset_state(self):
        self.reset_calls += 1

    async def create_public_group(self, params):
        return self._record("public", params)

    async def create_private_group(self, params):
        return self._record("private", params)

    def _record(self, group_type, params):
        self.calls.append((group_type, params))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingNotifier:
    def __init__(self):
        self.notifications = []

    def notify(self, notification):
        self.notifications.append(notification)


class RecordingNavigator:
    def __init__(self):
        self.paths = []

    def navigate_to(self, path):
        self.paths.append(path)


def fill_form(form, **overrides):
    """Fill a form with the 'Friends Fund' example values."""
    values = {
        "group_name": "Friends Fund",
        "max_members": "10",
        "contribution_amount": "50",
        "cycle_duration": "1",
        "cycle_unit": "days",
    }
    values.update(overrides)
    for name, value in values.items():
        form.set_field(name, value)
    return form


@pytest.fixture
def public_form():
    """A valid public group form."""
    return fill_form(FormState())


@pytest.fixture
def private_form():
    """A valid private group form with one invitee."""
    form = fill_form(FormState())
    form.set_group_type(GroupType.PRIVATE)
    form.add_invited_member(INVITEE)
    return form


@pytest.fixture
def contract():
    return FakeContract()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def navigator():
    return RecordingNavigator()
