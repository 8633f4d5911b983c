from __future__ import annotations

from typing import Literal, Protocol


NotificationChannel = Literal[
    "booking_confirmation",
    "admin_booking_notification",
    "payment_confirmation",
    "payment_failure",
]


class Notifier(Protocol):
    def notify(self, *, channel: NotificationChannel, payload: dict) -> None:
        ...
