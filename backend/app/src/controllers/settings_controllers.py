"""Admin settings endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from src.repositories.crm.dependencies import get_db
from src.services.settings.settings_service import SettingsService, get_settings_service

settings_router = APIRouter(prefix="/api", tags=["Settings"])


@settings_router.get("/settings")
def get_settings(
    db: Session = Depends(get_db),
    settings_service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Optional[str]]:
    return settings_service.get_settings(db)


@settings_router.put("/settings")
def update_settings(
    values: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    settings_service: SettingsService = Depends(get_settings_service),
) -> Dict[str, str]:
    """Store the given settings and re-initialise the provider clients."""
    settings_service.update_settings(db, values)
    return {"message": "Settings updated successfully"}


@settings_router.post("/test/openai")
def test_openai(
    db: Session = Depends(get_db),
    settings_service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    response = settings_service.test_openai(db)
    return {"success": True, "message": "OpenAI API is working", "response": response}


@settings_router.post("/test/smtp")
def test_smtp(
    settings_service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    settings_service.test_smtp()
    return {"success": True, "message": "SMTP connection is working"}
