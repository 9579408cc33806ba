from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from .drafts import Draft, DraftStore, draft_store
from .ledger import LedgerGroupClient


def get_wallet_address(
    x_wallet_address: Optional[str] = Header(default=None),
) -> Optional[str]:
    """Address of the wallet connected in the browser, if any."""
    if x_wallet_address is None or not x_wallet_address.strip():
        return None
    return x_wallet_address.strip()


def get_ledger_client(
    account: Optional[str] = Depends(get_wallet_address),
) -> LedgerGroupClient:
    return LedgerGroupClient(account=account)


def get_draft_store() -> DraftStore:
    return draft_store


def get_draft(
    draft_id: UUID,
    store: DraftStore = Depends(get_draft_store),
) -> Draft:
    """Get an open create-group draft."""
    draft = store.get(draft_id)
    if draft is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found"
        )
    return draft
