# divesight/api/routes/routes_fish.py

"""
Fish endpoints.

GET /api/fish            every fish with its latest sighting
GET /api/fish/{fish_id}  one fish with its full sighting history
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from divesight.api.deps import get_db
from divesight.schemas.fish import FishDetail, FishRead
from divesight.services.fish_service import get_all_fish, get_fish_by_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["fish"])


def _fetch_failed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to fetch fish"},
    )


@router.get("", response_model=list[FishRead], summary="List fish with latest sighting")
def list_fish(db: Session = Depends(get_db)):
    try:
        return get_all_fish(db)
    except SQLAlchemyError:
        logger.exception("Error fetching fish")
        return _fetch_failed()


@router.get(
    "/{fish_id}",
    response_model=FishDetail,
    summary="Fish with full sighting history",
    responses={404: {"description": "Fish not found"}},
)
def get_fish(fish_id: str, db: Session = Depends(get_db)):
    try:
        fish = get_fish_by_id(db, fish_id)
    except SQLAlchemyError:
        logger.exception("Error fetching fish %s", fish_id)
        return _fetch_failed()

    if fish is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Fish not found"},
        )
    return fish
