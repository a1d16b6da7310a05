from fastapi import APIRouter

from app.api.endpoints import diagnostics, leads

# Create API router
api_router = APIRouter()

api_router.include_router(diagnostics.router, tags=["diagnostics"])
api_router.include_router(leads.router, prefix="/whatsapp/leads", tags=["leads"])
