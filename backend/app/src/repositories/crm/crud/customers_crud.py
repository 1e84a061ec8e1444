"""
CRUD operations for managing customers in the database.

This module provides a `CRUDCustomer` class with methods to:
- List customers with an optional search/status filter.
- Retrieve a customer by ID.
- Find customers whose stored phone contains a digit string.
- Create, update and delete customers.
- Replace the set of services associated with a customer.
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session

from src.repositories.crm.database import SQLITE_FOLD_FUNCTION, fold_text, utcnow
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.services_model import Service


class CRUDCustomer:
    """
    Repository class for handling database operations related to customers.

    Write helpers only flush; the calling service owns the commit so that a
    multi-step change lands in a single transaction.
    """

    def get(self, db: Session, customer_id: int) -> Optional[Customer]:
        """
        Retrieve a customer by its ID.

        Args:
            db (Session): The database session.
            customer_id (int): The ID of the customer.

        Returns:
            Optional[Customer]: The customer if found, otherwise None.
        """
        return db.query(Customer).filter(Customer.id == customer_id).first()

    def list(
        self,
        db: Session,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Customer]:
        """
        List customers, most recently updated first.

        Args:
            db (Session): The database session.
            search (Optional[str]): Case-insensitive substring matched against
                first name, last name, email and company.
            status (Optional[str]): Exact status to filter on.

        Returns:
            List[Customer]: The matching customers.
        """
        query = db.query(Customer)
        if search:
            columns = (
                Customer.first_name,
                Customer.last_name,
                Customer.email,
                Customer.company,
            )
            if db.get_bind().dialect.name == "sqlite":
                pattern = f"%{fold_text(search)}%"
                conditions = [
                    getattr(func, SQLITE_FOLD_FUNCTION)(column).like(pattern)
                    for column in columns
                ]
            else:
                pattern = f"%{search}%"
                conditions = [column.ilike(pattern) for column in columns]
            query = query.filter(or_(*conditions))
        if status:
            query = query.filter(Customer.status == status)
        return query.order_by(desc(Customer.updated_at), desc(Customer.id)).all()

    def find_by_phone_fragment(self, db: Session, digits: str) -> List[Customer]:
        """Return customers whose phone contains ``digits``, oldest record first."""
        return (
            db.query(Customer)
            .filter(Customer.phone.isnot(None), Customer.phone.like(f"%{digits}%"))
            .order_by(Customer.id)
            .all()
        )

    def get_services(self, db: Session, service_ids: Sequence[int]) -> List[Service]:
        """Return the services with the given IDs."""
        if not service_ids:
            return []
        return db.query(Service).filter(Service.id.in_(service_ids)).all()

    def create(self, db: Session, data: Dict[str, Any]) -> Customer:
        """
        Add a new customer to the session.

        Args:
            db (Session): The database session.
            data (Dict[str, Any]): Column values.

        Returns:
            Customer: The pending customer, flushed so it has an ID.
        """
        customer = Customer(**data)
        db.add(customer)
        db.flush()
        return customer

    def update(self, db: Session, customer: Customer, data: Dict[str, Any]) -> Customer:
        """Apply ``data`` to the customer and bump ``updated_at``."""
        for field, value in data.items():
            setattr(customer, field, value)
        customer.updated_at = utcnow()
        db.add(customer)
        db.flush()
        return customer

    def replace_services(
        self, db: Session, customer: Customer, services: List[Service]
    ) -> Customer:
        """Drop every existing service association, then attach ``services``."""
        customer.services.clear()
        db.flush()
        customer.services.extend(services)
        db.flush()
        return customer

    def delete(self, db: Session, customer: Customer) -> Customer:
        """Delete the customer; dependants go with it."""
        db.delete(customer)
        db.flush()
        return customer
