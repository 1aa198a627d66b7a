"""
Health check router.
"""
from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Liveness plus which store backend is in use."""
    store = request.app.state.store
    return {
        "status": "healthy",
        "service": "greenhouse-plugin",
        "store": type(store).__name__ if store is not None else None,
        "disabled": request.app.state.options.disabled,
    }
