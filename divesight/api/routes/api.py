from fastapi import APIRouter

from divesight.api.routes.routes_diving_centers import router as diving_centers_router
from divesight.api.routes.routes_fish import router as fish_router


api_router = APIRouter()

api_router.include_router(diving_centers_router, prefix="/diving-centers")
api_router.include_router(fish_router, prefix="/fish")
