#!/usr/bin/env python3
"""
Score a match through the running API.

Usage:
    python rescore_match.py <match-id> <home-score> <away-score> [status]

Requires an admin access token in the AUTH_TOKEN environment variable
(copy it from your browser's dev tools after logging in).
"""

import asyncio
import os
import sys

import httpx

# API configuration - update if your API is running on a different port
API_BASE = os.getenv("API_BASE", "http://localhost:8000/api/v1")

AUTH_TOKEN = os.getenv("AUTH_TOKEN", "")


async def rescore_match(match_id: str, home_score: int, away_score: int, status: str):
    """Post a result to the admin score endpoint."""
    headers = {"Content-Type": "application/json"}
    if AUTH_TOKEN:
        headers["Authorization"] = f"Bearer {AUTH_TOKEN}"

    async with httpx.AsyncClient(timeout=60.0) as client:
        print(f"\n🔄 Scoring match {match_id}: {home_score}-{away_score} ({status})...")

        response = await client.post(
            f"{API_BASE}/admin/matches/{match_id}/score",
            json={"home_score": home_score, "away_score": away_score, "status": status},
            headers=headers,
        )

        if response.status_code == 200:
            data = response.json()
            print(
                f"   ✅ {data['action']}: {data['predictions_updated']} predictions updated"
            )
            return True

        print(f"   ❌ Failed: {response.status_code} - {response.text}")
        return False


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print(__doc__)
        sys.exit(1)

    match_id = sys.argv[1]
    home_score = int(sys.argv[2])
    away_score = int(sys.argv[3])
    status = sys.argv[4] if len(sys.argv) > 4 else "completed"

    ok = asyncio.run(rescore_match(match_id, home_score, away_score, status))
    sys.exit(0 if ok else 1)
