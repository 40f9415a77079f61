"""Notifier protocol.

Sends the customer their download link. Delivery is best effort: the result
is reported, never retried by the caller.

Implementations:
    - StubNotifier: storefront/infrastructure/email/stub_notifier.py
"""

from typing import Protocol


class NotifierProtocol(Protocol):
    """Outbound delivery-instructions capability."""

    async def send_download_link(
        self,
        customer_email: str,
        customer_name: str | None,
        download_url: str,
        order_id: str,
    ) -> bool:
        """Send delivery instructions.

        Args:
            customer_email: Recipient.
            customer_name: Greeting name, if known.
            download_url: Full URL including the download token.
            order_id: Order the artifact was purchased in.

        Returns:
            True if the message was handed off successfully.
        """
        ...
