# Match prediction scoring
# Points awarded for a predicted score against the final result, first rule wins:
#   exact score                      -> 3
#   correct winner + goal difference -> 2
#   correct winner (or draw) only    -> 1
#   wrong outcome                    -> 0
# The match multiplier (1-3) scales the base points.

from app.schemas.match import MULTIPLIER_MAX, MULTIPLIER_MIN

POINTS_EXACT_SCORE = 3
POINTS_GOAL_DIFFERENCE = 2
POINTS_CORRECT_WINNER = 1
POINTS_NONE = 0

POINTS_DESCRIPTIONS = {
    POINTS_EXACT_SCORE: "Exact score!",
    POINTS_GOAL_DIFFERENCE: "Correct winner + goal difference",
    POINTS_CORRECT_WINNER: "Correct winner",
    POINTS_NONE: "No points",
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def get_base_points(
    predicted_home: int, predicted_away: int, actual_home: int, actual_away: int
) -> int:
    """Get the unscaled points (0-3) for a prediction against a result."""
    if predicted_home == actual_home and predicted_away == actual_away:
        return POINTS_EXACT_SCORE

    predicted_diff = predicted_home - predicted_away
    actual_diff = actual_home - actual_away

    # Equal differences also means the same winner, or a draw on both sides
    if predicted_diff == actual_diff:
        return POINTS_GOAL_DIFFERENCE

    if _sign(predicted_diff) == _sign(actual_diff):
        return POINTS_CORRECT_WINNER

    return POINTS_NONE


def calculate_points(
    predicted_home: int,
    predicted_away: int,
    actual_home: int,
    actual_away: int,
    multiplier: int = 1,
) -> int:
    """Calculate the points earned by a prediction, including the match multiplier."""
    base_points = get_base_points(
        predicted_home, predicted_away, actual_home, actual_away
    )
    return base_points * multiplier


def get_points_description(base_points: int, multiplier: int = 1) -> str:
    """Human readable label for base points, e.g. "Exact score! (×2)"."""
    description = POINTS_DESCRIPTIONS.get(base_points, POINTS_DESCRIPTIONS[POINTS_NONE])
    if multiplier > 1:
        return f"{description} (×{multiplier})"
    return description


def get_scoring_rules() -> dict:
    """Scoring configuration as served to the frontend."""
    return {
        "rules": [
            {"points": points, "description": description}
            for points, description in sorted(
                POINTS_DESCRIPTIONS.items(), reverse=True
            )
        ],
        "multiplier_min": MULTIPLIER_MIN,
        "multiplier_max": MULTIPLIER_MAX,
        "description": "Exact score 3, winner + goal difference 2, winner 1, "
        "multiplied by the match multiplier",
    }
