"""Pydantic schemas for customers and the service catalogue."""

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, StringConstraints


CustomerStatus = Literal["active", "inactive", "potential"]
CustomerType = Literal["cold", "warm", "hot"]


class CustomerBase(BaseModel):
    """Shared identity attributes for customers."""

    first_name: Annotated[str, StringConstraints(min_length=1, max_length=100)]
    last_name: Annotated[str, StringConstraints(min_length=1, max_length=100)]
    email: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    phone: Optional[Annotated[str, StringConstraints(max_length=20)]] = None
    company: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    instagram: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    website: Optional[Annotated[str, StringConstraints(max_length=255)]] = None


class CustomerCreate(CustomerBase):
    """Payload required to create a customer."""

    status: Optional[CustomerStatus] = None
    services: List[int] = Field(default_factory=list)


class CustomerUpdate(BaseModel):
    """Fields allowed to update; only the supplied ones are applied."""

    first_name: Optional[Annotated[str, StringConstraints(min_length=1, max_length=100)]] = None
    last_name: Optional[Annotated[str, StringConstraints(min_length=1, max_length=100)]] = None
    email: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    phone: Optional[Annotated[str, StringConstraints(max_length=20)]] = None
    company: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    instagram: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    website: Optional[Annotated[str, StringConstraints(max_length=255)]] = None
    status: Optional[CustomerStatus] = None
    avatar: Optional[Annotated[str, StringConstraints(max_length=255)]] = None
    services: Optional[List[int]] = None


class CustomerFilter(BaseModel):
    """Query parameters accepted by the customer list."""

    search: Optional[str] = None
    status: Optional[CustomerStatus] = None


class CustomerResponse(CustomerBase):
    """Response model for a stored customer, joined with its service names."""

    id: int
    status: CustomerStatus
    avatar: Optional[str] = None
    last_interaction: Optional[datetime] = None
    customer_type: Optional[CustomerType] = None
    potential_budget: Optional[float] = None
    sales_difficulty_score: Optional[int] = None
    interested_services: Optional[str] = None
    ai_analysis_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    services: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("service_names", "services")
    )

    model_config = {
        "from_attributes": True,
    }


class ServiceResponse(BaseModel):
    """Response model for a catalogue service."""

    id: int
    name: str
    description: Optional[str] = None
    default_price: Optional[float] = None
    is_active: bool

    model_config = {
        "from_attributes": True,
    }
