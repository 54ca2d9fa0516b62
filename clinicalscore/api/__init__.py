"""API routers for the clinical calculators service."""

from clinicalscore.api.calculators import router as calculators_router
from clinicalscore.api.sessions import router as sessions_router

__all__ = [
    "calculators_router",
    "sessions_router",
]
