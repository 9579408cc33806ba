import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from circle_core.builder import OutcomeKind
from circle_core.catalog import SUPPORTED_TOKENS, GroupType
from circle_core.errors import InvalidAddress, SubmissionBlocked, UnknownFormField

from ..core.database import get_db
from ..core.deps import get_draft, get_draft_store, get_ledger_client, get_wallet_address
from ..core.drafts import Draft, DraftStore
from ..core.ledger import LedgerGroupClient
from ..models.group import GroupCreation
from ..schemas.group import (
    DraftResponse,
    FieldUpdate,
    GroupCreationResponse,
    GroupTypeUpdate,
    LockUpdate,
    MemberAdd,
    StagedAddressUpdate,
    SubmissionResponse,
    TokenResponse,
    TokenUpdate,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Outcomes that leave the draft editable
OUTCOME_STATUS = {
    OutcomeKind.NOT_CONNECTED: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.REJECTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OutcomeKind.FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def _draft_response(draft: Draft) -> DraftResponse:
    return DraftResponse(
        id=draft.id,
        status=draft.builder.status.value,
        is_creating=draft.builder.is_creating,
        is_connected=draft.builder.is_connected,
        **draft.form.snapshot(),
    )


@router.get("", response_model=List[GroupCreationResponse])
async def list_groups(
    group_type: Optional[GroupType] = Query(None, description="Filter by group type"),
    creator: Optional[str] = Query(None, description="Filter by creator address"),
    db: Session = Depends(get_db),
):
    """List savings groups created through this service."""
    query = select(GroupCreation)
    if group_type:
        query = query.where(GroupCreation.group_type == group_type)
    if creator:
        query = query.where(GroupCreation.creator_address == creator)

    groups = db.exec(query.order_by(GroupCreation.created_at.desc())).all()
    return [GroupCreationResponse.model_validate(group) for group in groups]


@router.get("/tokens", response_model=List[TokenResponse])
async def list_tokens():
    """Tokens a savings group can be denominated in."""
    return [TokenResponse(**token._asdict()) for token in SUPPORTED_TOKENS.values()]


@router.post("/drafts", response_model=DraftResponse, status_code=status.HTTP_201_CREATED)
async def create_draft(
    store: DraftStore = Depends(get_draft_store),
    contract: LedgerGroupClient = Depends(get_ledger_client),
):
    """Open a new create-group form."""
    draft = store.create(contract)
    return _draft_response(draft)


@router.get("/drafts/{draft_id}", response_model=DraftResponse)
async def get_draft_state(draft: Draft = Depends(get_draft)):
    return _draft_response(draft)


@router.delete("/drafts/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    draft: Draft = Depends(get_draft),
    store: DraftStore = Depends(get_draft_store),
):
    """Abandon a create-group form."""
    store.discard(draft.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/drafts/{draft_id}/fields", response_model=DraftResponse)
async def update_field(update: FieldUpdate, draft: Draft = Depends(get_draft)):
    """Update one form field. Values are checked on submit."""
    try:
        draft.form.set_field(update.name, update.value)
    except UnknownFormField as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _draft_response(draft)


@router.put("/drafts/{draft_id}/type", response_model=DraftResponse)
async def update_group_type(update: GroupTypeUpdate, draft: Draft = Depends(get_draft)):
    draft.form.set_group_type(update.group_type)
    return _draft_response(draft)


@router.put("/drafts/{draft_id}/lock", response_model=DraftResponse)
async def update_lock(update: LockUpdate, draft: Draft = Depends(get_draft)):
    draft.form.set_lock(update.lock_enabled, update.lock_amount)
    return _draft_response(draft)


@router.put("/drafts/{draft_id}/token", response_model=DraftResponse)
async def update_token(update: TokenUpdate, draft: Draft = Depends(get_draft)):
    draft.form.set_token(update.selected_token)
    return _draft_response(draft)


@router.put("/drafts/{draft_id}/address", response_model=DraftResponse)
async def stage_address(update: StagedAddressUpdate, draft: Draft = Depends(get_draft)):
    """Update the invitee address being typed."""
    draft.form.set_current_address(update.address)
    return _draft_response(draft)


@router.post("/drafts/{draft_id}/members", response_model=DraftResponse)
async def add_member(member: MemberAdd, draft: Draft = Depends(get_draft)):
    """Invite a wallet address to a private group."""
    try:
        draft.form.add_invited_member(member.address)
    except InvalidAddress as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"title": e.title, "message": e.message, "address": e.address},
        )
    return _draft_response(draft)


@router.delete("/drafts/{draft_id}/members/{address}", response_model=DraftResponse)
async def remove_member(address: str, draft: Draft = Depends(get_draft)):
    draft.form.remove_invited_member(address)
    return _draft_response(draft)


@router.post("/drafts/{draft_id}/validate", response_model=ValidationResponse)
async def validate_draft(draft: Draft = Depends(get_draft)):
    """Check the form without submitting it."""
    result = draft.builder.validate(draft.form)
    return ValidationResponse(valid=result.ok, error=result.error)


@router.post(
    "/drafts/{draft_id}/submit",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_draft(
    draft: Draft = Depends(get_draft),
    account: Optional[str] = Depends(get_wallet_address),
    db: Session = Depends(get_db),
):
    """Create the savings group on the ledger."""
    # The wallet connected right now decides, not the one the draft was opened with
    if account:
        draft.contract.connect(account)
    else:
        draft.contract.disconnect()

    try:
        outcome = await draft.builder.create_group(draft.form)
    except SubmissionBlocked as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    notifications = draft.notifier.drain()

    if not outcome.ok:
        raise HTTPException(
            status_code=OUTCOME_STATUS[outcome.kind],
            detail={
                "kind": outcome.kind.value,
                "message": outcome.message,
                "field": outcome.error.field if outcome.error else None,
                "notifications": [n.model_dump() for n in notifications],
            },
        )

    form = draft.form
    group_name = form.data.group_name.strip()
    group = GroupCreation(
        group_type=form.group_type,
        group_name=group_name,
        description=form.data.description or None,
        max_members=int(form.data.max_members),
        contribution_amount=form.data.contribution_amount.strip(),
        cycle_duration=int(form.data.cycle_duration),
        cycle_unit=form.data.cycle_unit,
        token=form.selected_token,
        lock_enabled=form.lock.lock_enabled,
        invited_count=len(form.invited_members) if form.group_type == GroupType.PRIVATE else 0,
        creator_address=draft.contract.account,
        transaction_hash=outcome.transaction_hash,
    )
    # The group already exists on the ledger, a failed record must not hide that
    try:
        db.add(group)
        db.commit()
        logger.info(f"Recorded group '{group_name}' from draft {draft.id}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Failed to record group '{group_name}' "
            f"(transaction {outcome.transaction_hash}): {e}"
        )

    return SubmissionResponse(
        kind=outcome.kind,
        transaction_hash=outcome.transaction_hash,
        notifications=notifications,
        redirect_to=draft.builder.listing_path,
        redirect_after_ms=draft.builder.redirect_delay_ms,
    )
