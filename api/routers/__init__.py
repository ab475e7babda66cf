"""
Router package for the FitHub API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- pods: Accountability pods, invitations, commitments and messages
- workouts: Smart launcher, adaptive workouts and fatigue analysis
- nutrition: Barcode lookup and food search
"""

from api.routers.health import router as health_router
from api.routers.pods import router as pods_router
from api.routers.workouts import router as workouts_router
from api.routers.nutrition import router as nutrition_router

__all__ = [
    "health_router",
    "pods_router",
    "workouts_router",
    "nutrition_router",
]
