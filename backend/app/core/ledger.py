import logging
from typing import Any, Dict, Optional

import httpx

from circle_core.errors import SubmissionFailure

from .config import settings

logger = logging.getLogger(__name__)


class LedgerGroupClient:
    """
    Wallet session plus HTTP client for the ledger gateway.

    The gateway signs and broadcasts the savings group contract call and
    answers with the transaction hash.
    """

    def __init__(
        self,
        account: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.account = account
        self.base_url = (base_url or settings.LEDGER_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.LEDGER_API_KEY
        self.timeout = timeout or settings.LEDGER_TIMEOUT_SECONDS
        self.is_creating = False
        self.last_transaction_hash: Optional[str] = None
        self.last_error: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self.account is not None

    def connect(self, account: str) -> None:
        self.account = account

    def disconnect(self) -> None:
        self.account = None

    def reset_state(self) -> None:
        """Forget the previous attempt."""
        self.is_creating = False
        self.last_transaction_hash = None
        self.last_error = None

    async def create_public_group(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create_group("public", params)

    async def create_private_group(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create_group("private", params)

    def _get_headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json", "X-Wallet-Address": self.account or ""}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _create_group(self, group_type: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/groups/{group_type}"
        self.is_creating = True
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=params, headers=self._get_headers())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            self.last_error = message
            logger.error(
                f"Ledger rejected {group_type} group creation "
                f"({e.response.status_code}): {message}"
            )
            raise SubmissionFailure(message, status_code=e.response.status_code)
        except httpx.HTTPError as e:
            self.last_error = str(e)
            logger.error(f"Ledger request failed for {url}: {e}")
            raise SubmissionFailure(str(e))
        finally:
            self.is_creating = False

        self.last_transaction_hash = data.get("transaction_hash")
        return data


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None
