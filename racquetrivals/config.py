"""Runtime settings loaded from the environment (and ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_SITE_URL = "https://racquetrivals.com"
DEFAULT_PREDICTION_WINDOW_HOURS = 12

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Settings consumed by the gate, the notifier and the SMTP mailer.

    Attributes
    ----------
    sender_address : str
        ``From`` address of outgoing notifications.
    sender_name : str
        Display name paired with ``sender_address``.
    site_url : str
        Public base URL used to build draw links.
    prediction_window : timedelta
        Time between the round of 16 filling up and predictions closing.
    smtp_host : Optional[str]
        SMTP relay host. ``None`` means mail is not configured.
    smtp_port : int
        SMTP relay port.
    smtp_username, smtp_password : Optional[str]
        Credentials for the relay, if it requires authentication.
    smtp_starttls : bool
        Upgrade the connection with STARTTLS before authenticating.
    """

    sender_address: str = "no-reply@racquetrivals.com"
    sender_name: str = "Racquet Rivals"
    site_url: str = DEFAULT_SITE_URL
    prediction_window: timedelta = timedelta(hours=DEFAULT_PREDICTION_WINDOW_HOURS)
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_starttls: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ`` after loading ``.env``)."""

        if env is None:
            load_dotenv()
            env = os.environ

        window_hours = _get_int(
            env, "PREDICTION_WINDOW_HOURS", DEFAULT_PREDICTION_WINDOW_HOURS
        )
        if window_hours <= 0:
            raise ConfigurationError("PREDICTION_WINDOW_HOURS must be positive")

        return cls(
            sender_address=env.get("MAIL_SENDER_ADDRESS") or cls.sender_address,
            sender_name=env.get("MAIL_SENDER_NAME") or cls.sender_name,
            site_url=(env.get("SITE_URL") or DEFAULT_SITE_URL).rstrip("/"),
            prediction_window=timedelta(hours=window_hours),
            smtp_host=env.get("SMTP_HOST") or None,
            smtp_port=_get_int(env, "SMTP_PORT", 587),
            smtp_username=env.get("SMTP_USERNAME") or None,
            smtp_password=env.get("SMTP_PASSWORD") or None,
            smtp_starttls=(env.get("SMTP_STARTTLS", "true").strip().lower() in _TRUE_VALUES),
        )


__all__ = ["Settings", "DEFAULT_SITE_URL", "DEFAULT_PREDICTION_WINDOW_HOURS"]
