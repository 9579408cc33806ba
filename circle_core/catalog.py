from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

ADDRESS_PREFIX = "0x"
MIN_ADDRESS_LENGTH = 10

MIN_MEMBERS = 2
MIN_CYCLE_DURATION = 1

DEFAULT_TOKEN = "usdc"
DEFAULT_REDIRECT_DELAY_MS = 2000
DEFAULT_LISTING_PATH = "/groups"


class GroupType(str, Enum):
    """Savings group visibility."""

    PUBLIC = "public"
    PRIVATE = "private"


class CycleUnit(str, Enum):
    """Units a contribution cycle can be expressed in."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class TokenOption(NamedTuple):
    value: str
    label: str
    icon: str


# Display order matters, keys are unique
SUPPORTED_TOKENS: Mapping[str, TokenOption] = MappingProxyType(
    {
        "usdc": TokenOption("usdc", "USDC", "💵"),
        "eth": TokenOption("eth", "ETH", "⟠"),
        "strk": TokenOption("strk", "STRK", "🔺"),
        "usdt": TokenOption("usdt", "USDT", "₮"),
        "dai": TokenOption("dai", "DAI", "◈"),
        "wbtc": TokenOption("wbtc", "WBTC", "₿"),
    }
)

MAX_MEMBERS: Mapping[GroupType, int] = MappingProxyType(
    {
        GroupType.PUBLIC: 100,
        GroupType.PRIVATE: 50,
    }
)


def cycle_unit_values() -> list[str]:
    return [unit.value for unit in CycleUnit]
