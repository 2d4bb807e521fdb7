"""
Ticket Data Models

Inbound ticket representation consumed by the classification pipeline.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CUSTOMER_NAME = "Valued Customer"
DEFAULT_CUSTOMER_PRIORITY = "Standard"
DEFAULT_SOURCE = "unknown"


class CustomerPriority(str, Enum):
    """Customer service tier."""

    VIP = "VIP"
    STANDARD = "Standard"


class TicketSource(str, Enum):
    """Channel the ticket arrived through."""

    EMAIL = "email"
    WEB = "web"
    API = "api"


class CustomerInfo(BaseModel):
    """Optional customer metadata attached to a ticket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    email: str | None = None
    name: str | None = None
    priority: CustomerPriority | None = None


class TicketInput(BaseModel):
    """A support ticket submitted for classification. Immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "subject": "System is down",
                "description": "Complete system outage affecting all users",
                "customerInfo": {
                    "email": "jane@example.com",
                    "name": "Jane Doe",
                    "priority": "VIP",
                },
                "source": "email",
            }
        },
    )

    subject: str = Field(..., min_length=1, description="Ticket subject line")
    description: str = Field(..., min_length=1, description="Ticket body")
    customer_info: CustomerInfo | None = None
    source: TicketSource | None = None
    language: str | None = None

    @field_validator("subject", "description")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Reject strings made only of whitespace."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def customer_name(self) -> str:
        if self.customer_info and self.customer_info.name:
            return self.customer_info.name
        return DEFAULT_CUSTOMER_NAME

    @property
    def customer_priority(self) -> str:
        if self.customer_info and self.customer_info.priority:
            return self.customer_info.priority.value
        return DEFAULT_CUSTOMER_PRIORITY

    @property
    def source_label(self) -> str:
        return self.source.value if self.source else DEFAULT_SOURCE
