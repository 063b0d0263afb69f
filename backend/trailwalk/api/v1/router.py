"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from trailwalk.api.v1.routes import trails, activity, runs, achievements

api_router = APIRouter()

api_router.include_router(trails.router, prefix="/trails", tags=["Trails"])
api_router.include_router(activity.router, prefix="/users", tags=["Activity"])
api_router.include_router(runs.router, prefix="/users", tags=["Runs"])
api_router.include_router(achievements.router, prefix="/users", tags=["Achievements"])
