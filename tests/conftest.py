import os

# Settings are read when app.core.config is first imported
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-service-role-key")
os.environ.setdefault(
    "SUPABASE_JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256"
)

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from app.db.store import MatchNotFoundError

TOKEN_SECRET = os.environ["SUPABASE_JWT_SECRET"]


class FakeStore:
    """In-memory stand-in for MatchStore that records every write."""

    def __init__(self):
        self.matches: dict[str, dict] = {}
        self.predictions: dict[str, dict] = {}
        self.admins: set[str] = set()
        self.users: dict[str, dict] = {}
        self.participants: set[tuple[str, str]] = set()
        self.match_updates: list[tuple] = []
        self.prediction_writes: list[tuple] = []
        self.fail_match_update = False
        self.fail_prediction_write_after: int | None = None

    def add_match(self, match_id, status="scheduled", multiplier=1, tournament_id="t-1"):
        self.matches[match_id] = {
            "id": match_id,
            "status": status,
            "multiplier": multiplier,
            "tournament_id": tournament_id,
            "home_score": None,
            "away_score": None,
        }

    def add_prediction(
        self, prediction_id, match_id, home, away, user_id="user-1", points_earned=0
    ):
        self.predictions[prediction_id] = {
            "id": prediction_id,
            "match_id": match_id,
            "user_id": user_id,
            "predicted_home_score": home,
            "predicted_away_score": away,
            "points_earned": points_earned,
        }

    def add_participant(
        self, tournament_id, user_id, screen_name=None, avatar_url=None, status="active"
    ):
        self.participants.add((tournament_id, user_id))
        self.users[user_id] = {
            "screen_name": screen_name,
            "avatar_url": avatar_url,
            "status": status,
        }

    def points(self, prediction_id):
        return self.predictions[prediction_id]["points_earned"]

    # MatchStore interface

    def get_match(self, match_id):
        if match_id not in self.matches:
            raise MatchNotFoundError(match_id)
        match = self.matches[match_id]
        return {
            "id": match["id"],
            "multiplier": match["multiplier"],
            "status": match["status"],
            "tournament_id": match["tournament_id"],
        }

    def update_match_result(self, match_id, home_score, away_score, status, updated_at):
        if self.fail_match_update:
            raise RuntimeError("Update failed")
        self.match_updates.append((match_id, home_score, away_score, status, updated_at))
        self.matches[match_id].update(
            {"home_score": home_score, "away_score": away_score, "status": status}
        )

    def list_predictions(self, match_id):
        return [
            {
                "id": p["id"],
                "predicted_home_score": p["predicted_home_score"],
                "predicted_away_score": p["predicted_away_score"],
                "points_earned": p["points_earned"],
            }
            for p in self.predictions.values()
            if p["match_id"] == match_id
        ]

    def set_prediction_points(self, prediction_id, points):
        if (
            self.fail_prediction_write_after is not None
            and len(self.prediction_writes) >= self.fail_prediction_write_after
        ):
            raise RuntimeError("Write failed")
        self.prediction_writes.append((prediction_id, points))
        self.predictions[prediction_id]["points_earned"] = points

    def list_match_ids(self, exclude_status):
        return [m["id"] for m in self.matches.values() if m["status"] != exclude_status]

    def reset_points_for_matches(self, match_ids):
        match_ids = set(match_ids)
        for p in self.predictions.values():
            if p["match_id"] in match_ids:
                p["points_earned"] = 0

    def list_tournament_points(self, tournament_id):
        return [
            {"user_id": p["user_id"], "points_earned": p["points_earned"]}
            for p in self.predictions.values()
            if self.matches[p["match_id"]]["tournament_id"] == tournament_id
        ]

    def list_active_participants(self, tournament_id):
        return [
            {
                "user_id": user_id,
                "screen_name": self.users[user_id]["screen_name"],
                "avatar_url": self.users[user_id]["avatar_url"],
            }
            for t_id, user_id in sorted(self.participants)
            if t_id == tournament_id and self.users[user_id]["status"] == "active"
        ]

    def is_admin(self, user_id):
        return user_id in self.admins


def make_token(
    user_id: str, secret: str = TOKEN_SECRET, expires_in: timedelta = timedelta(hours=1)
) -> str:
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(store):
    from app.db.store import get_match_store
    from app.main import app
    from fastapi.testclient import TestClient

    app.dependency_overrides[get_match_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(store):
    store.admins.add("admin-1")
    return {"Authorization": f"Bearer {make_token('admin-1')}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {make_token('user-1')}"}


@pytest.fixture
def auth_headers():
    def _headers(user_id, **token_kwargs):
        return {"Authorization": f"Bearer {make_token(user_id, **token_kwargs)}"}

    return _headers
