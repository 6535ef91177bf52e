"""Round arithmetic and prediction scoring."""

from .rounds import round_of_sixteen_round, rounds_past_round_of_sixteen
from .points import ROUND_POINTS, award_points, names_match
from .engine import PredictionScore, ScoringEngine

__all__ = [
    "ROUND_POINTS",
    "PredictionScore",
    "ScoringEngine",
    "award_points",
    "names_match",
    "round_of_sixteen_round",
    "rounds_past_round_of_sixteen",
]
