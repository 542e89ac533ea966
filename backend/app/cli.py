#!/usr/bin/env python3
"""
Maintenance CLI for match scoring.

Usage:
    match-predictions score <match-id> --home 2 --away 1            # Score a match
    match-predictions score <match-id> --home 2 --away 1 --status in_progress
    match-predictions reset-incomplete                               # Zero points on unfinished matches
    match-predictions rankings <tournament-id>                       # Print tournament rankings
"""

import argparse
import logging
import sys
from typing import List, Optional

from app.core.logging import setup_logging
from app.db.store import MatchNotFoundError, MatchStore, get_match_store
from app.schemas.match import MatchStatus
from app.services.rankings import get_tournament_rankings
from app.services.rescoring import reset_incomplete_predictions, score_match

logger = logging.getLogger(__name__)


def run_command(args: argparse.Namespace, store: MatchStore) -> int:
    """Run a CLI command against the given store."""
    if args.command == "score":
        try:
            outcome = score_match(
                store,
                args.match_id,
                home_score=args.home,
                away_score=args.away,
                status=MatchStatus(args.status),
            )
        except MatchNotFoundError as e:
            print(f"Error: {e}")
            return 1
        print(
            f"\n✅ Match {args.match_id} scored {args.home}-{args.away} "
            f"({outcome.action.value}, {outcome.predictions_updated} predictions updated)"
        )

    elif args.command == "reset-incomplete":
        matches_affected = reset_incomplete_predictions(store)
        print(f"\n✅ Reset predictions for {matches_affected} non-completed matches")

    elif args.command == "rankings":
        rankings = get_tournament_rankings(store, args.tournament_id)
        if not rankings:
            print("No predictions found for this tournament")
        for entry in rankings:
            print(
                f"{entry.rank:>4}  {entry.user_id}  {entry.total_points:>5} pts  "
                f"({entry.predictions_count} predictions)"
            )

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="match-predictions",
        description="Score matches and maintain prediction points",
    )
    parser.add_argument(
        "--log-level", default=None, help="Logging level (defaults to LOG_LEVEL)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Record a match result")
    score.add_argument("match_id")
    score.add_argument("--home", type=int, required=True, help="Home score")
    score.add_argument("--away", type=int, required=True, help="Away score")
    score.add_argument(
        "--status",
        choices=[s.value for s in MatchStatus],
        default=MatchStatus.COMPLETED.value,
    )

    subparsers.add_parser(
        "reset-incomplete", help="Zero points for predictions on unfinished matches"
    )

    rankings = subparsers.add_parser("rankings", help="Show tournament rankings")
    rankings.add_argument("tournament_id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "score" and (args.home < 0 or args.away < 0):
        parser.error("scores must be non-negative")

    setup_logging(args.log_level)

    try:
        return run_command(args, get_match_store())
    except Exception:
        logger.exception(f"Command {args.command} failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
