"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.api.routes import booking

api_router = APIRouter()
api_router.include_router(booking.router)
