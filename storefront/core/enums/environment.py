"""Application environment types.

Environments:
- DEVELOPMENT: Local development, colored console logs, long-lived download links
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Live storefront, JSON logs, 7-day download links
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
