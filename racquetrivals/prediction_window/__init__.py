"""Gating of the prediction window for a draw."""

from .gate import DEFAULT_PREDICTION_WINDOW, ROUND_OF_SIXTEEN_SLOTS, PredictionWindowGate
from .notifications import (
    SUBJECT,
    NotificationReport,
    RoundOfSixteenNotifier,
    draw_slug,
    draw_title,
    round_of_sixteen_html,
)

__all__ = [
    "DEFAULT_PREDICTION_WINDOW",
    "ROUND_OF_SIXTEEN_SLOTS",
    "SUBJECT",
    "NotificationReport",
    "PredictionWindowGate",
    "RoundOfSixteenNotifier",
    "draw_slug",
    "draw_title",
    "round_of_sixteen_html",
]
