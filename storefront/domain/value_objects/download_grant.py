"""Download grant value object (download token payload)."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class DownloadGrant:
    """What a download token grants access to.

    Attributes:
        customer_email: Email the delivery link was sent to.
        order_id: Provider order (checkout session) id.
        customer_name: Name used in the delivery email, if known.
    """

    customer_email: str
    order_id: str
    customer_name: str | None = None
