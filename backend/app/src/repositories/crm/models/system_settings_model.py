"""Key/value settings editable from the admin panel."""

from sqlalchemy import Column, Enum, Integer, String, Text, TIMESTAMP

from src.repositories.crm.database import Base, utcnow


class SystemSetting(Base):  # type: ignore[misc]
    """A single persisted setting, e.g. ``openai_api_key``."""

    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    setting_key = Column(String(100), unique=True, nullable=False)
    setting_value = Column(Text, nullable=True)
    setting_type = Column(
        Enum("string", "number", "boolean", "json", name="setting_type"),
        default="string",
        nullable=False,
    )
    updated_at = Column(TIMESTAMP(timezone=False), default=utcnow, onupdate=utcnow)
