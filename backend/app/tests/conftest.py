"""Shared fixtures: an in-memory SQLite database and a clean configuration."""

from typing import Any, Callable, Generator, List

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from configs import Settings
from src.repositories.crm import models  # noqa: F401
from src.repositories.crm.database import Base, build_engine
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.services_model import Service
from src.repositories.crm.models.users_model import User
from src.services.settings.runtime_config import RuntimeConfig


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    Base.metadata.drop_all(bind=db_engine)
    db_engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def env_settings() -> Settings:
    """Environment settings with every provider credential unset."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        OPENAI_API_KEY=None,
        TWILIO_ACCOUNT_SID=None,
        TWILIO_AUTH_TOKEN=None,
        TWILIO_WHATSAPP_NUMBER=None,
        SMTP_HOST=None,
        SMTP_USER=None,
        SMTP_PASS=None,
    )


@pytest.fixture
def runtime_config(env_settings: Settings) -> RuntimeConfig:
    return RuntimeConfig.from_sources(env_settings)


@pytest.fixture
def user(db: Session) -> User:
    admin = User(username="admin", email="admin@agency.com", role="admin")
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def services(db: Session) -> List[Service]:
    catalogue = [
        Service(name="Web Tasarım", default_price=5000.0),
        Service(name="SEO", default_price=3000.0),
        Service(name="Logo Tasarım", default_price=1000.0),
    ]
    db.add_all(catalogue)
    db.commit()
    for service in catalogue:
        db.refresh(service)
    return catalogue


@pytest.fixture
def make_customer(db: Session) -> Callable[..., Customer]:
    """Insert a customer directly, bypassing the service layer."""

    def _make(**fields: Any) -> Customer:
        data = {"first_name": "Ayşe", "last_name": "Yılmaz", **fields}
        customer = Customer(**data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    return _make
