"""
API routers for endpoint organization.
"""
from .health import router as health_router
from .jobs import router as jobs_router
from .apply import router as apply_router
from .settings import router as settings_router
from .dashboard import router as dashboard_router

__all__ = [
    "health_router",
    "jobs_router",
    "apply_router",
    "settings_router",
    "dashboard_router",
]
