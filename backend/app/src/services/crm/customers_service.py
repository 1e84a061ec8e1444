"""This module provides the CustomerService class (the customer store)."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.services_crud import CRUDService
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.services_model import Service
from src.repositories.crm.schemas.customers_schema import (
    CustomerCreate,
    CustomerFilter,
    CustomerUpdate,
)
from src.services.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email address is already registered."
_REQUIRED_FIELDS = ("first_name", "last_name", "status")


class CustomerService:
    """Service layer for customer records and their service associations."""

    def __init__(
        self, repository: CRUDCustomer, service_repository: CRUDService
    ) -> None:
        """
        Initialize the CustomerService.

        Args:
            repository (CRUDCustomer): Repository for customer database operations.
            service_repository (CRUDService): Repository for the service catalogue.
        """
        self.repository = repository
        self.service_repository = service_repository

    def list(self, db: Session, filters: Optional[CustomerFilter] = None) -> List[Customer]:
        """
        List customers, most recently updated first.

        Args:
            db (Session): The database session.
            filters (Optional[CustomerFilter]): Optional search text and status.

        Returns:
            List[Customer]: The matching customers.
        """
        filters = filters or CustomerFilter()
        return self.repository.list(db, search=filters.search, status=filters.status)

    def list_services(self, db: Session) -> List[Service]:
        return self.service_repository.list_active(db)

    def get(self, db: Session, customer_id: int) -> Customer:
        customer = self.repository.get(db, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def create(self, db: Session, customer_in: CustomerCreate) -> Customer:
        """
        Create a customer with its services.

        The status defaults to ``potential``; classification fields stay empty.

        Raises:
            ValidationError: an unknown service id was given.
            ConflictError: the email is already used by another customer.
        """
        data = customer_in.model_dump(exclude={"services"})
        data["status"] = data.get("status") or "potential"
        data["email"] = data.get("email") or None
        services = self._resolve_services(db, customer_in.services)

        try:
            customer = self.repository.create(db, data)
            if services:
                self.repository.replace_services(db, customer, services)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise self._integrity_error(exc) from exc

        db.refresh(customer)
        logger.info("Customer %s created", customer.id)
        return customer

    def update(
        self, db: Session, customer_id: int, customer_update: CustomerUpdate
    ) -> Optional[Customer]:
        """
        Apply the supplied fields and, if given, replace the service set.

        Field changes and service replacement are committed together. An
        unknown ``customer_id`` is a no-op that returns None.

        Raises:
            ValidationError: an unknown service id was given.
            ConflictError: the new email is already used by another customer.
        """
        customer = self.repository.get(db, customer_id)
        if customer is None:
            logger.info("Update skipped, customer %s does not exist", customer_id)
            return None

        data: Dict[str, Any] = customer_update.model_dump(exclude_unset=True)
        service_ids = data.pop("services", None)
        for field in _REQUIRED_FIELDS:
            if field in data and data[field] is None:
                data.pop(field)
        if "email" in data:
            data["email"] = data["email"] or None

        services = (
            self._resolve_services(db, service_ids) if service_ids is not None else None
        )

        try:
            self.repository.update(db, customer, data)
            if services is not None:
                self.repository.replace_services(db, customer, services)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise self._integrity_error(exc) from exc

        db.refresh(customer)
        return customer

    def delete(self, db: Session, customer_id: int) -> None:
        """Hard delete a customer with its notes, tasks, messages, meetings and proposals."""
        customer = self.repository.get(db, customer_id)
        if customer is None:
            logger.info("Delete skipped, customer %s does not exist", customer_id)
            return
        self.repository.delete(db, customer)
        db.commit()
        logger.info("Customer %s deleted", customer_id)

    def _resolve_services(self, db: Session, service_ids: List[int]) -> List[Service]:
        unique_ids = list(dict.fromkeys(service_ids))
        services = self.repository.get_services(db, unique_ids)
        found = {service.id for service in services}
        missing = [str(service_id) for service_id in unique_ids if service_id not in found]
        if missing:
            raise ValidationError(f"Unknown service id(s): {', '.join(missing)}")
        return sorted(services, key=lambda service: unique_ids.index(service.id))

    @staticmethod
    def _integrity_error(exc: IntegrityError) -> Exception:
        if "email" in str(exc.orig).lower():
            return ConflictError(DUPLICATE_EMAIL_MESSAGE)
        return ValidationError(f"Customer could not be saved: {exc.orig}")


# Dependency Injection for FastAPI
def get_customer_service(
    repository: CRUDCustomer = Depends(),
    service_repository: CRUDService = Depends(),
) -> CustomerService:
    """Retrieve an instance of CustomerService with the provided repositories."""
    return CustomerService(repository, service_repository)
