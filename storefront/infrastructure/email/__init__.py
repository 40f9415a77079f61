"""Notifier implementations.

- StubNotifier: logs delivery instructions instead of sending mail
"""

from storefront.infrastructure.email.stub_notifier import StubNotifier

__all__ = ["StubNotifier"]
