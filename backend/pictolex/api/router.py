from fastapi import APIRouter

from pictolex.api.routes.analyze import router as analyze_router
from pictolex.api.routes.morphology import router as morphology_router
from pictolex.api.routes.root import router as root_router

api_router = APIRouter()
api_router.include_router(root_router)
api_router.include_router(analyze_router)
api_router.include_router(morphology_router)
