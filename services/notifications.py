"""Outbound SMS notification backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from config import Settings

from .errors import NotificationError

logger = logging.getLogger(__name__)


class AbstractNotifier(ABC):
    """Interface for SMS senders."""

    @abstractmethod
    def send_sms(self, phone: str, message: str) -> None:
        """Deliver ``message`` to ``phone`` or raise ``NotificationError``."""


class TwilioNotifier(AbstractNotifier):
    """Send SMS through the Twilio Messages REST endpoint."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        if not (
            settings.twilio_account_sid
            and settings.twilio_auth_token
            and settings.twilio_from_number
        ):
            raise RuntimeError("Twilio credentials are not configured.")
        self.account_sid = settings.twilio_account_sid
        self._auth = (settings.twilio_account_sid, settings.twilio_auth_token)
        self.from_number = settings.twilio_from_number
        self.api_base = settings.twilio_api_base.rstrip("/")
        self._client = client

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"

    def _post(self, client: httpx.Client, phone: str, message: str) -> httpx.Response:
        response = client.post(
            self.messages_url,
            auth=self._auth,
            data={"To": phone, "From": self.from_number, "Body": message},
        )
        response.raise_for_status()
        return response

    def send_sms(self, phone: str, message: str) -> None:
        if not phone:
            raise NotificationError("no phone number on file")
        try:
            if self._client is not None:
                response = self._post(self._client, phone, message)
            else:
                with httpx.Client() as client:
                    response = self._post(client, phone, message)
        except httpx.HTTPError as exc:
            logger.error("Error sending SMS message: %s", exc, exc_info=True)
            raise NotificationError() from exc

        logger.info("SMS dispatched to %s (status %s)", phone, response.status_code)


class LogNotifier(AbstractNotifier):
    """Development backend that writes messages to the log instead of sending."""

    def send_sms(self, phone: str, message: str) -> None:
        if not phone:
            raise NotificationError("no phone number on file")
        logger.info("SMS to %s: %s", phone, message)


def build_notifier(settings: Settings) -> AbstractNotifier:
    """Return the notifier selected by ``settings.notification_backend``."""

    if settings.notification_backend == "log":
        return LogNotifier()
    if settings.notification_backend == "twilio":
        return TwilioNotifier(settings)
    raise RuntimeError(f"Unknown notification backend: {settings.notification_backend}")
