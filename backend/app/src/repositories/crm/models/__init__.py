"""Import every model so the mappers and ``Base.metadata`` are complete."""

from src.repositories.crm.models.users_model import User
from src.repositories.crm.models.services_model import Service, customer_services
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.notes_model import Note, NoteAnnotation
from src.repositories.crm.models.tasks_model import Task
from src.repositories.crm.models.whatsapp_model import WhatsAppMessage, WhatsAppTemplate
from src.repositories.crm.models.meetings_model import Meeting
from src.repositories.crm.models.proposals_model import Proposal, ProposalItem
from src.repositories.crm.models.expenses_model import Expense
from src.repositories.crm.models.system_settings_model import SystemSetting

__all__ = [
    "User",
    "Service",
    "customer_services",
    "Customer",
    "Note",
    "NoteAnnotation",
    "Task",
    "WhatsAppMessage",
    "WhatsAppTemplate",
    "Meeting",
    "Proposal",
    "ProposalItem",
    "Expense",
    "SystemSetting",
]
