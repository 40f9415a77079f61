"""Artifact store error types."""

from dataclasses import dataclass

from storefront.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ArtifactError(DomainError):
    """Purchased artifact could not be located or opened.

    Attributes:
        order_id: Order whose artifact was requested.
    """

    order_id: str
