from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class PaymentStatus(StrEnum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    ISSUE = "issue"

    @classmethod
    def parse(cls, raw: str | None) -> PaymentStatus:
        """Map provider status text onto the page's three branches.

        Matching is exact: anything other than "success" or "cancelled" (other
        casing, padding, missing input) is an issue.
        """

        if raw == cls.SUCCESS.value:
            return cls.SUCCESS
        if raw == cls.CANCELLED.value:
            return cls.CANCELLED
        return cls.ISSUE


@dataclass(frozen=True)
class StatusContent:
    icon: str
    heading: str
    body: str


_RETURN_TO_APP_BODY = "You can return to the app safe and sound."

_CONTENT: dict[PaymentStatus, StatusContent] = {
    PaymentStatus.SUCCESS: StatusContent(
        icon="🎉",
        heading="Payment Confirmed!",
        body="Your wallet balance has been updated.",
    ),
    PaymentStatus.CANCELLED: StatusContent(
        icon="🛑",
        heading="Payment Cancelled",
        body=_RETURN_TO_APP_BODY,
    ),
    PaymentStatus.ISSUE: StatusContent(
        icon="⚠️",
        heading="Payment Issue",
        body=_RETURN_TO_APP_BODY,
    ),
}


def content_for_status(status: PaymentStatus | str | None) -> StatusContent:
    if not isinstance(status, PaymentStatus):
        status = PaymentStatus.parse(status)
    return _CONTENT[status]
