"""
Persistence layer for match results and prediction points.

All reads and writes go through the Supabase tables `matches`,
`predictions`, `tournament_participants` and `users`. Errors raised by
the client (postgrest APIError) are not caught here.
"""

from typing import Callable, Iterable, List

from app.db.supabase import get_supabase_client
from supabase import Client

# Supabase's default max-rows; list reads are paged in chunks of this size
PAGE_SIZE = 1000


class MatchNotFoundError(LookupError):
    """Raised when a match id does not exist."""

    def __init__(self, match_id: str):
        super().__init__(f"Match {match_id} not found")
        self.match_id = match_id


class MatchStore:
    def __init__(self, client: Client, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def _fetch_all(self, build_query: Callable) -> List[dict]:
        """Run an ordered select page by page until a short page comes back."""
        rows: List[dict] = []
        start = 0
        while True:
            response = build_query().range(start, start + self.page_size - 1).execute()
            page = response.data or []
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    def get_match(self, match_id: str) -> dict:
        """Fetch the fields needed to score a match."""
        response = (
            self.client.table("matches")
            .select("id, multiplier, status, tournament_id")
            .eq("id", match_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            raise MatchNotFoundError(match_id)

        return response.data[0]

    def update_match_result(
        self,
        match_id: str,
        home_score: int,
        away_score: int,
        status: str,
        updated_at: str,
    ) -> None:
        self.client.table("matches").update(
            {
                "home_score": home_score,
                "away_score": away_score,
                "status": status,
                "updated_at": updated_at,
            }
        ).eq("id", match_id).execute()

    def list_predictions(self, match_id: str) -> List[dict]:
        """Get all predictions referencing a match."""
        return self._fetch_all(
            lambda: self.client.table("predictions")
            .select("id, predicted_home_score, predicted_away_score, points_earned")
            .eq("match_id", match_id)
            .order("id")
        )

    def set_prediction_points(self, prediction_id: str, points: int) -> None:
        self.client.table("predictions").update({"points_earned": points}).eq(
            "id", prediction_id
        ).execute()

    def list_match_ids(self, exclude_status: str) -> List[str]:
        """Get ids of all matches whose status differs from `exclude_status`."""
        rows = self._fetch_all(
            lambda: self.client.table("matches")
            .select("id")
            .neq("status", exclude_status)
            .order("id")
        )
        return [m["id"] for m in rows]

    def reset_points_for_matches(self, match_ids: Iterable[str]) -> None:
        """Zero points_earned on every prediction for the given matches."""
        match_ids = list(match_ids)
        if not match_ids:
            return

        self.client.table("predictions").update({"points_earned": 0}).in_(
            "match_id", match_ids
        ).execute()

    def list_tournament_points(self, tournament_id: str) -> List[dict]:
        """Get (user_id, points_earned) for every prediction in a tournament."""
        rows = self._fetch_all(
            lambda: self.client.table("predictions")
            .select("id, user_id, points_earned, matches!inner(tournament_id)")
            .eq("matches.tournament_id", tournament_id)
            .order("id")
        )
        return [
            {"user_id": p["user_id"], "points_earned": p.get("points_earned") or 0}
            for p in rows
        ]

    def list_active_participants(self, tournament_id: str) -> List[dict]:
        """Get the active users taking part in a tournament, with their public profile."""
        rows = self._fetch_all(
            lambda: self.client.table("tournament_participants")
            .select("user_id, users!inner(screen_name, avatar_url, status)")
            .eq("tournament_id", tournament_id)
            .eq("users.status", "active")
            .order("user_id")
        )
        return [
            {
                "user_id": r["user_id"],
                "screen_name": (r.get("users") or {}).get("screen_name"),
                "avatar_url": (r.get("users") or {}).get("avatar_url"),
            }
            for r in rows
        ]

    def is_admin(self, user_id: str) -> bool:
        response = (
            self.client.table("users")
            .select("is_admin")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            return False

        return bool(response.data[0].get("is_admin"))


def get_match_store() -> MatchStore:
    """FastAPI dependency providing a store over the shared Supabase client."""
    return MatchStore(get_supabase_client())
