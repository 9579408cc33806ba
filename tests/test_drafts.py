from datetime import datetime, timedelta

import pytest

from backend.app.core.drafts import DraftStore
from circle_core.builder import SubmissionStatus

from conftest import FakeContract


@pytest.fixture
def store():
    return DraftStore(ttl=timedelta(minutes=30))


class TestDraftExpiry:
    def test_abandoned_drafts_are_dropped(self, store):
        """Test that drafts untouched past the TTL are evicted."""
        for _ in range(50):
            store.create(FakeContract())

        dropped = store.prune(now=datetime.utcnow() + timedelta(minutes=31))

        assert dropped == 50
        assert len(store) == 0

    def test_recent_drafts_are_kept(self, store):
        store.create(FakeContract())

        dropped = store.prune(now=datetime.utcnow() + timedelta(minutes=29))

        assert dropped == 0
        assert len(store) == 1

    def test_create_evicts_expired_drafts(self, store):
        stale = store.create(FakeContract())
        stale.touched_at = datetime.utcnow() - timedelta(hours=2)

        fresh = store.create(FakeContract())

        assert len(store) == 1
        assert store.get(fresh.id) is fresh
        assert store.get(stale.id) is None

    def test_get_refreshes_draft(self, store):
        draft = store.create(FakeContract())
        draft.touched_at = datetime.utcnow() - timedelta(minutes=20)

        store.get(draft.id)

        assert store.prune(now=datetime.utcnow() + timedelta(minutes=20)) == 0
        assert len(store) == 1

    def test_draft_in_flight_is_kept(self, store):
        draft = store.create(FakeContract())
        draft.touched_at = datetime.utcnow() - timedelta(hours=2)
        draft.builder.status = SubmissionStatus.SUBMITTING

        assert store.prune() == 0
        assert len(store) == 1

    def test_default_ttl_from_settings(self):
        assert DraftStore().ttl == timedelta(minutes=60)


class TestDraftNavigation:
    def test_navigation_closes_draft(self, store):
        draft = store.create(FakeContract())

        draft.builder.navigator.navigate_to("/groups")

        assert len(store) == 0
