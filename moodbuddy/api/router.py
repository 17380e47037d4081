"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from moodbuddy.api.routes import auth, mood

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(mood.router)
