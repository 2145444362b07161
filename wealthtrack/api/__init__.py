"""
API routes for the calculation engine.
"""

from fastapi import APIRouter

from wealthtrack.api import calculations, export, insights

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(insights.router, prefix="/insights", tags=["insights"])
router.include_router(export.router, prefix="/export", tags=["export"])
