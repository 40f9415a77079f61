"""System endpoint response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RootResponse(BaseModel):
    """Service information and endpoint listing."""

    message: str = Field(..., description="Service banner")
    status: str = Field(..., description="Operational status")
    version: str = Field(..., description="Application version")
    timestamp: str = Field(..., description="Current server time (ISO 8601)")
    endpoints: dict[str, str] = Field(..., description="Endpoint name to path")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    service: str = Field(..., description="Service name")
    timestamp: str = Field(..., description="Current server time (ISO 8601)")
    environment: str = Field(..., description="Deployment environment")
    port: int = Field(..., description="Bound port")
    uptime: float = Field(..., description="Seconds since startup")


class StripePublicConfig(BaseModel):
    """Browser-side Stripe configuration."""

    model_config = ConfigDict(populate_by_name=True)

    publishable_key: str = Field(..., alias="publishableKey")


class PublicConfigResponse(BaseModel):
    """Configuration the storefront page loads at startup."""

    stripe: StripePublicConfig


class CheckoutReturnResponse(BaseModel):
    """Landing response after the hosted checkout redirects back."""

    status: str = Field(..., description="success or cancelled")
    message: str = Field(..., description="Message for the customer")
    session_id: str | None = Field(None, description="Provider session id")
