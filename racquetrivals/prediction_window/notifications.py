"""Notification content for a draw whose round of 16 is ready."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import Settings
from ..mail import Address, Mailer, Message
from ..models import Draw, User
from ..store import SlotStore

logger = logging.getLogger(__name__)

SUBJECT = "Time to make your picks!"


def draw_title(draw: Draw) -> str:
    """Return ``"<name> <event> <year>"`` with apostrophes removed from the event."""
    event = draw.event.replace("'", "")
    return f"{draw.name} {event} {draw.year}"


def draw_slug(draw: Draw) -> str:
    """Return the URL slug of ``draw``: lower-cased, hyphenated, suffixed with its id."""
    event = draw.event.replace("'", "")
    slug = "-".join([draw.name, event, str(draw.year)]).replace(" ", "-").lower()
    return f"{slug}-{draw.id}"


def round_of_sixteen_html(draw: Draw, site_url: str, window_hours: int = 12) -> str:
    title = draw_title(draw)
    link = f"{site_url.rstrip('/')}/draw/{draw_slug(draw)}"
    return (
        f"The Round of 16 is ready to go for: <b>{title}</b>. "
        f"You have {window_hours} hours to make your picks for ALL of the remaining matches, "
        f'good luck!<br><br><a href="{link}">Racquet Rivals - {title}</a>'
    )


@dataclass
class NotificationReport:
    """Outcome of notifying users about one draw."""

    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class RoundOfSixteenNotifier:
    """Emails every user with an address that a draw is open for picks.

    Delivery is attempted once per recipient. A failure is logged and the
    next recipient is tried; it never propagates.
    """

    def __init__(self, store: SlotStore, mailer: Mailer, settings: Settings) -> None:
        self._store = store
        self._mailer = mailer
        self._settings = settings

    def build_message(self, draw: Draw, recipient: str) -> Message:
        return Message(
            sender=Address(
                address=self._settings.sender_address,
                name=self._settings.sender_name,
            ),
            to=[Address(address=recipient)],
            subject=SUBJECT,
            html=round_of_sixteen_html(
                draw,
                self._settings.site_url,
                int(self._settings.prediction_window.total_seconds() // 3600),
            ),
        )

    def notify(self, draw: Draw) -> NotificationReport:
        report = NotificationReport()
        users = self._store.list_by_filter(User, 'email!=""')
        for user in users:
            email = user.email
            if not email:
                continue
            try:
                self._mailer.send(self.build_message(draw, email))
            except Exception:
                logger.exception(
                    f"Failed to notify user {user.id} about draw {draw.id}"
                )
                report.failed.append(email)
                continue
            report.sent.append(email)

        logger.info(
            f"Draw {draw.id} round of 16 notification: "
            f"{len(report.sent)} sent, {len(report.failed)} failed"
        )
        return report


__all__ = [
    "SUBJECT",
    "NotificationReport",
    "RoundOfSixteenNotifier",
    "draw_slug",
    "draw_title",
    "round_of_sixteen_html",
]
