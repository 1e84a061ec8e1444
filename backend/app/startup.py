"""Default records every fresh database needs."""

import logging

from sqlalchemy.orm import Session

from src.repositories.crm.database import SessionLocal
from src.repositories.crm.models.services_model import Service
from src.repositories.crm.models.system_settings_model import SystemSetting
from src.repositories.crm.models.users_model import User
from src.repositories.crm.models.whatsapp_model import WhatsAppTemplate

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    ("Web Tasarım", "Modern ve responsive web sitesi tasarımı", 5000.00),
    ("Sosyal Medya Yönetimi", "Sosyal medya hesaplarının profesyonel yönetimi", 2000.00),
    ("SEO", "Arama motoru optimizasyonu hizmetleri", 3000.00),
    ("E-Ticaret", "E-ticaret sitesi kurulumu ve yönetimi", 8000.00),
    ("Grafik Tasarım", "Profesyonel grafik tasarım hizmetleri", 1500.00),
    ("Logo Tasarım", "Kurumsal kimlik ve logo tasarımı", 1000.00),
    ("Google Reklam", "Google Ads kampanya yönetimi", 2500.00),
    ("Meta Reklam", "Facebook ve Instagram reklam yönetimi", 2500.00),
    ("Marka Danışmanlığı", "Marka stratejisi ve danışmanlık hizmetleri", 4000.00),
]

DEFAULT_TEMPLATES = [
    (
        "İlk Temas",
        "first_contact",
        "Merhaba! {customer_name}, dijital ajansımız hakkında bilgi almak istediğinizi "
        "öğrendik. Size nasıl yardımcı olabiliriz?",
    ),
    (
        "Teklif Yanıtı",
        "proposal_response",
        "Merhaba {customer_name}, talebiniz doğrultusunda hazırladığımız teklifi "
        "incelemenizi rica ederiz. Sorularınız için bize ulaşabilirsiniz.",
    ),
    (
        "Teşekkür Mesajı",
        "thank_you",
        "Merhaba {customer_name}, bize gösterdiğiniz ilgi için teşekkür ederiz. "
        "En kısa sürede size dönüş yapacağız.",
    ),
    (
        "Takip Mesajı",
        "follow_up",
        "Merhaba {customer_name}, gönderdiğimiz teklifi inceleme fırsatınız oldu mu? "
        "Sorularınız varsa yardımcı olmaktan memnuniyet duyarız.",
    ),
]

# Provider keys stay blank so environment values apply until an admin sets them.
DEFAULT_SETTINGS = [
    ("app_name", "Agency CRM Ultimate"),
    ("app_logo", ""),
    ("primary_color", "#3B82F6"),
    ("secondary_color", "#10B981"),
    ("language", "tr"),
    ("theme_mode", "auto"),
    ("font_family", "Poppins"),
    ("openai_api_key", ""),
    ("twilio_account_sid", ""),
    ("twilio_auth_token", ""),
    ("twilio_whatsapp_number", ""),
    ("smtp_host", ""),
    ("smtp_port", ""),
    ("smtp_user", ""),
    ("smtp_pass", ""),
]

DEFAULT_ADMIN = {"username": "admin", "email": "admin@agency.com", "role": "admin"}


def create_seed_data(db: Session) -> None:
    """Insert default services, templates, settings and the admin user when absent."""
    if not db.query(Service).count():
        logger.info("Services table is empty, inserting the default catalogue.")
        for name, description, price in DEFAULT_SERVICES:
            db.add(Service(name=name, description=description, default_price=price))

    existing_templates = {name for (name,) in db.query(WhatsAppTemplate.name).all()}
    for name, template_type, content in DEFAULT_TEMPLATES:
        if name not in existing_templates:
            db.add(WhatsAppTemplate(name=name, template_type=template_type, content=content))

    existing_keys = {key for (key,) in db.query(SystemSetting.setting_key).all()}
    for key, value in DEFAULT_SETTINGS:
        if key not in existing_keys:
            db.add(SystemSetting(setting_key=key, setting_value=value))

    if db.query(User).filter(User.role == "admin").first() is None:
        db.add(User(**DEFAULT_ADMIN))
        logger.info("Default admin user created (%s)", DEFAULT_ADMIN["email"])

    db.commit()


if __name__ == "__main__":  # pragma: no cover
    from src.repositories.crm import models  # noqa: F401
    from src.repositories.crm.database import Base, engine

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        create_seed_data(session)
    finally:
        session.close()
