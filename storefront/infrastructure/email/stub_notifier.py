"""Stub notifier (development/testing).

Logs the delivery email instead of sending it. The most recent rendered
messages are kept in memory so tests and local runs can inspect what would
have been sent.
"""

from collections import deque
from dataclasses import dataclass

from storefront.domain.protocols import LoggerProtocol

RECENT_MESSAGE_LIMIT = 100


@dataclass(frozen=True, slots=True, kw_only=True)
class SentMessage:
    """A delivery email that was 'sent'."""

    to_email: str
    subject: str
    body: str
    order_id: str


class StubNotifier:
    """Notifier that logs instead of sending (implements NotifierProtocol)."""

    def __init__(
        self,
        logger: LoggerProtocol,
        *,
        product_name: str,
        link_ttl_days: int,
        max_downloads: int,
        keep_last: int = RECENT_MESSAGE_LIMIT,
    ) -> None:
        """Initialize stub notifier.

        Args:
            logger: Structured logger.
            product_name: Product named in the subject line.
            link_ttl_days: Link lifetime quoted in the email.
            max_downloads: Download limit quoted in the email.
            keep_last: Number of recent messages kept in `sent`.
        """
        self._logger = logger
        self._product_name = product_name
        self._link_ttl_days = link_ttl_days
        self._max_downloads = max_downloads
        self.sent: deque[SentMessage] = deque(maxlen=keep_last)

    async def send_download_link(
        self,
        customer_email: str,
        customer_name: str | None,
        download_url: str,
        order_id: str,
    ) -> bool:
        """Render and log the delivery email.

        Returns:
            Always True.
        """
        message = SentMessage(
            to_email=customer_email,
            subject=f"Your {self._product_name} is ready",
            body=self._render(customer_name, download_url, order_id),
            order_id=order_id,
        )
        self.sent.append(message)
        self._logger.info(
            "Delivery email sent (stub)",
            to_email=customer_email,
            subject=message.subject,
            order_id=order_id,
        )
        return True

    def _render(
        self, customer_name: str | None, download_url: str, order_id: str
    ) -> str:
        greeting = f"Hello {customer_name}!" if customer_name else "Hello!"
        return (
            f"{greeting}\n\n"
            f"Thank you for purchasing {self._product_name}. "
            f"Download it here:\n{download_url}\n\n"
            f"This link expires in {self._link_ttl_days} days and can be used "
            f"up to {self._max_downloads} times.\n\n"
            f"Order ID: {order_id}\n"
        )
