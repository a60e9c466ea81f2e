# divesight/api/routes/routes_diving_centers.py

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from divesight.api.deps import get_db
from divesight.schemas.diving_center import DivingCenterRead
from divesight.services.diving_center_service import get_all_diving_centers

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diving-centers"])


@router.get("", response_model=list[DivingCenterRead], summary="List diving centers")
def list_diving_centers(db: Session = Depends(get_db)):
    try:
        return get_all_diving_centers(db)
    except SQLAlchemyError:
        logger.exception("Error fetching diving centers")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch diving centers"},
        )
