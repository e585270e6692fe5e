from fastapi import APIRouter

from app.api.routes import activities, analysis, components, impacts, projects, utils

api_router = APIRouter()
api_router.include_router(utils.router, tags=["utils"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(
    activities.router, prefix="/projects/{id}/activities", tags=["activities"]
)
api_router.include_router(
    components.router, prefix="/projects/{id}/components", tags=["components"]
)
api_router.include_router(impacts.router, prefix="/projects/{id}/impacts", tags=["impacts"])
api_router.include_router(analysis.router, tags=["analysis"])
