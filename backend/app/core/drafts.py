import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from circle_core.builder import GroupRequestBuilder, Notification
from circle_core.form import FormState

from .config import settings
from .ledger import LedgerGroupClient

logger = logging.getLogger(__name__)


class CollectingNotifier:
    """Keeps notifications until the API hands them to the client."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def drain(self) -> List[Notification]:
        notifications, self.notifications = self.notifications, []
        return notifications


class DraftNavigator:
    """Leaving the form closes its draft."""

    def __init__(self, store: "DraftStore", draft_id: UUID):
        self.store = store
        self.draft_id = draft_id

    def navigate_to(self, path: str) -> None:
        logger.info(f"Draft {self.draft_id} navigated to {path}, closing it")
        self.store.discard(self.draft_id)


@dataclass
class Draft:
    id: UUID
    form: FormState
    contract: LedgerGroupClient
    builder: GroupRequestBuilder
    notifier: CollectingNotifier = field(default_factory=CollectingNotifier)
    touched_at: datetime = field(default_factory=datetime.utcnow)


class DraftStore:
    """
    Create-group forms in progress, one per browser session.

    A draft nobody has used for `ttl` counts as abandoned and is dropped
    the next time the store is used. Drafts with a request in flight are kept.
    """

    def __init__(self, ttl: Optional[timedelta] = None):
        self.ttl = ttl or timedelta(minutes=settings.DRAFT_TTL_MINUTES)
        self._drafts: Dict[UUID, Draft] = {}

    def create(self, contract: LedgerGroupClient) -> Draft:
        self.prune()

        draft_id = uuid4()
        notifier = CollectingNotifier()
        builder = GroupRequestBuilder(
            contract,
            notifier=notifier,
            navigator=DraftNavigator(self, draft_id),
            redirect_delay_ms=settings.REDIRECT_DELAY_MS,
            listing_path=settings.GROUPS_LISTING_PATH,
        )
        draft = Draft(
            id=draft_id,
            form=FormState(),
            contract=contract,
            builder=builder,
            notifier=notifier,
        )
        self._drafts[draft_id] = draft
        logger.info(f"Opened draft {draft_id}")
        return draft

    def get(self, draft_id: UUID) -> Optional[Draft]:
        self.prune()

        draft = self._drafts.get(draft_id)
        if draft is not None:
            draft.touched_at = datetime.utcnow()
        return draft

    def discard(self, draft_id: UUID) -> None:
        self._drafts.pop(draft_id, None)

    def prune(self, now: Optional[datetime] = None) -> int:
        """Drop abandoned drafts and return how many were dropped."""
        cutoff = (now or datetime.utcnow()) - self.ttl
        expired = [
            draft_id
            for draft_id, draft in self._drafts.items()
            if draft.touched_at < cutoff and not draft.builder.is_creating
        ]
        for draft_id in expired:
            del self._drafts[draft_id]

        if expired:
            logger.info(f"Dropped {len(expired)} abandoned drafts")
        return len(expired)

    def __len__(self) -> int:
        return len(self._drafts)


draft_store = DraftStore()
