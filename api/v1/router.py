# api/v1/router.py
from fastapi import APIRouter

from . import admin, fasts, health, insights, meals, profile, weights

api_router = APIRouter()

api_router.include_router(fasts.router, prefix="/fasts", tags=["Fasts"])
api_router.include_router(insights.router, prefix="/insights", tags=["Insights"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(weights.router, prefix="/weights", tags=["Weight"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])

# water + Apple Health / Google Fit live next to the profile
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
