from __future__ import annotations

import logging

import httpx

from app.application.ports.notifier_port import NotificationChannel, Notifier
from app.domain.exceptions import NotificationError


logger = logging.getLogger(__name__)


class HttpNotifier(Notifier):
    """Entrega notificacoes a um relay HTTP (servico de e-mail).

    O relay deduplica pelo header Idempotency-Key, entao reenviar o mesmo
    payload depois de uma reentrega do webhook e seguro.
    """

    def __init__(
        self,
        *,
        relay_url: str,
        timeout_seconds: float,
        api_key: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._relay_url = relay_url
        self._timeout = timeout_seconds
        self._api_key = api_key
        self._transport = transport

    def notify(self, *, channel: NotificationChannel, payload: dict) -> None:
        headers = {"Content-Type": "application/json"}
        idempotency_key = payload.get("idempotency_key")
        if idempotency_key:
            headers["Idempotency-Key"] = str(idempotency_key)
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        body = {"channel": channel, **payload}
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(self._relay_url, json=body, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning(
                "notification_relay: send_failed channel=%s idempotency_key=%s error=%s",
                channel,
                idempotency_key,
                exc,
            )
            raise NotificationError(f"Failed to send '{channel}' notification.") from exc

        logger.info(
            "notification_relay: sent channel=%s idempotency_key=%s status=%s",
            channel,
            idempotency_key,
            response.status_code,
        )


class LogNotifier(Notifier):
    def notify(self, *, channel: NotificationChannel, payload: dict) -> None:
        logger.info(
            "notification_relay: not_configured channel=%s to=%s idempotency_key=%s",
            channel,
            payload.get("to"),
            payload.get("idempotency_key"),
        )
