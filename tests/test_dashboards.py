"""Unit tests for the role-aware dashboard."""

from __future__ import annotations

from fastapi.testclient import TestClient

from archconnect.models.user import user_from_row
from archconnect.services.dashboards import get_architect_dashboard, get_homeowner_dashboard
from archconnect.services.interactions import hire_architect, toggle_follow, toggle_save
from tests.conftest import (
    ARCHITECT_ID,
    HOMEOWNER_ID,
    OTHER_ARCHITECT_ID,
    FakeSupabase,
    make_post_row,
    make_user_row,
)

ANA_POST_ID = "55555555-5555-5555-5555-555555555555"
OTTO_POST_ID = "66666666-6666-6666-6666-666666666666"


def _seed(db: FakeSupabase) -> None:
    db.add("posts", make_post_row(ANA_POST_ID, ARCHITECT_ID, title="Courtyard house"))
    db.add("posts", make_post_row(OTTO_POST_ID, OTHER_ARCHITECT_ID, title="Lake pavilion"))
    toggle_follow(HOMEOWNER_ID, ARCHITECT_ID, is_following=False)
    toggle_follow(ARCHITECT_ID, OTHER_ARCHITECT_ID, is_following=False)
    toggle_save(HOMEOWNER_ID, OTTO_POST_ID, is_saved=False)
    hire_architect(HOMEOWNER_ID, ARCHITECT_ID)


class TestArchitectDashboard:
    def test_aggregates_own_posts_and_network(self, fake_db: FakeSupabase) -> None:
        _seed(fake_db)
        ana = user_from_row(make_user_row(ARCHITECT_ID, "architect", "ana"))

        dashboard = get_architect_dashboard(ana)

        assert dashboard.role == "architect"
        assert [p.title for p in dashboard.my_posts] == ["Courtyard house"]
        assert dashboard.stats.designs_count == 1
        assert dashboard.stats.followers_count == 1
        assert [u.username for u in dashboard.followers] == ["hugo"]
        assert [u.username for u in dashboard.following] == ["otto"]
        assert [u.username for u in dashboard.other_architects] == ["otto"]

    def test_hiring_homeowner_contact_visible_to_architect(self, fake_db: FakeSupabase) -> None:
        _seed(fake_db)
        ana = user_from_row(make_user_row(ARCHITECT_ID, "architect", "ana"))

        dashboard = get_architect_dashboard(ana)

        assert dashboard.followers[0].contact == "+1 555 0100 (hugo)"


class TestHomeownerDashboard:
    def test_aggregates_feed_saves_follows_and_hires(self, fake_db: FakeSupabase) -> None:
        _seed(fake_db)
        hugo = user_from_row(make_user_row(HOMEOWNER_ID, "homeowner", "hugo"))

        dashboard = get_homeowner_dashboard(hugo)

        assert dashboard.role == "homeowner"
        assert {p.title for p in dashboard.feed} == {"Courtyard house", "Lake pavilion"}
        assert {a.username for a in dashboard.architects} == {"ana", "otto"}
        assert [str(s.post_id) for s in dashboard.saved_posts] == [OTTO_POST_ID]
        assert [u.username for u in dashboard.following] == ["ana"]
        assert [h.architect.username for h in dashboard.hired_architects] == ["ana"]

    def test_followed_only_feed(self, fake_db: FakeSupabase) -> None:
        _seed(fake_db)
        hugo = user_from_row(make_user_row(HOMEOWNER_ID, "homeowner", "hugo"))

        dashboard = get_homeowner_dashboard(hugo, followed_only=True)

        assert [p.title for p in dashboard.feed] == ["Courtyard house"]


class TestDashboardEndpoint:
    def test_architect_gets_architect_dashboard(
        self, fake_db: FakeSupabase, architect_client: TestClient
    ) -> None:
        response = architect_client.get("/api/v1/dashboard")

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "architect"
        assert "stats" in body

    def test_homeowner_gets_homeowner_dashboard(
        self, fake_db: FakeSupabase, homeowner_client: TestClient
    ) -> None:
        response = homeowner_client.get("/api/v1/dashboard", params={"followed_only": "true"})

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "homeowner"
        assert "hired_architects" in body

    def test_dashboard_requires_token(self, fake_db: FakeSupabase, test_client: TestClient) -> None:
        assert test_client.get("/api/v1/dashboard").status_code == 401
