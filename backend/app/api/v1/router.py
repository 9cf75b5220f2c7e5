"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from app.api.v1.endpoints import exam_import, exams, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router)
api_router.include_router(exam_import.router)
api_router.include_router(exams.router)
