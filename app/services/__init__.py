# Los servicios se construyen en app.main.create_app y se inyectan vía app.api.deps
from app.services.lead_service import LeadService, normalize_lead

__all__ = ["LeadService", "normalize_lead"]
