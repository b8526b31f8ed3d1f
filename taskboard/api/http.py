"""
HTTP API Routes - service-level endpoints that need no authentication.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def read_root():
    """Health check endpoint."""
    return {"status": "ok"}
