"""Customer store endpoints, plus the service catalogue and customer analysis."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.analysis_schema import CustomerAnalysisResult
from src.repositories.crm.schemas.customers_schema import (
    CustomerCreate,
    CustomerFilter,
    CustomerResponse,
    CustomerStatus,
    CustomerUpdate,
    ServiceResponse,
)
from src.services.crm.customer_analysis_service import (
    CustomerAnalysisService,
    get_customer_analysis_service,
)
from src.services.crm.customers_service import CustomerService, get_customer_service

customer_router = APIRouter(prefix="/api", tags=["Customers"])


@customer_router.get("/services")
def list_services(
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> List[ServiceResponse]:
    """Active catalogue services ordered by name."""
    return [
        ServiceResponse.model_validate(service)
        for service in customer_service.list_services(db)
    ]


@customer_router.get("/customers")
def list_customers(
    search: Optional[str] = None,
    status: Optional[CustomerStatus] = None,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> List[CustomerResponse]:
    """List customers, most recently updated first."""
    customers = customer_service.list(db, CustomerFilter(search=search, status=status))
    return [CustomerResponse.model_validate(customer) for customer in customers]


@customer_router.post("/customers", status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_in: CustomerCreate,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    return CustomerResponse.model_validate(customer_service.create(db, customer_in))


@customer_router.put("/customers/{customer_id}")
def update_customer(
    customer_id: int,
    customer_update: CustomerUpdate,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> Optional[CustomerResponse]:
    """Apply a partial update; an unknown id answers ``null``."""
    customer = customer_service.update(db, customer_id, customer_update)
    return CustomerResponse.model_validate(customer) if customer else None


@customer_router.delete("/customers/{customer_id}")
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> Dict[str, str]:
    customer_service.delete(db, customer_id)
    return {"message": "Customer deleted successfully"}


@customer_router.post("/customers/{customer_id}/analyze")
def analyze_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    analysis_service: CustomerAnalysisService = Depends(get_customer_analysis_service),
) -> CustomerAnalysisResult:
    """Classify the customer with the language model."""
    return analysis_service.analyze(db, customer_id, user_id)
