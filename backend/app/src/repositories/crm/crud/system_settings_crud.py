"""CRUD helpers for persisted system settings."""

from typing import Dict, Optional

from sqlalchemy.orm import Session

from src.repositories.crm.models.system_settings_model import SystemSetting


class CRUDSystemSetting:
    """Database access for the ``system_settings`` key/value table."""

    def as_dict(self, db: Session) -> Dict[str, Optional[str]]:
        """Return every setting as a ``{key: value}`` mapping."""
        return {
            setting.setting_key: setting.setting_value
            for setting in db.query(SystemSetting).order_by(SystemSetting.id).all()
        }

    def upsert(self, db: Session, key: str, value: Optional[str]) -> SystemSetting:
        """Insert the setting if it doesn't exist, otherwise overwrite its value."""
        setting = db.query(SystemSetting).filter(SystemSetting.setting_key == key).first()
        if setting:
            setting.setting_value = value
        else:
            setting = SystemSetting(setting_key=key, setting_value=value)
            db.add(setting)
        db.flush()
        return setting
