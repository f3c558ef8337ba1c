from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.analysis_service import AnalysisService
from ..schemas.design.design import DesignRoastRequest, DesignRoastResult, StoredDesignRoast
from ..schemas.common.common import ErrorResponse
from .dependencies import get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/design", tags=["Design Roast"])


@router.post("/roast", response_model=DesignRoastResult, responses={500: {"model": ErrorResponse}})
async def roast_design(
    body: DesignRoastRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Critique an uploaded design. Without imageData a simulated roast is
    returned instead of an error.
    """
    try:
        return await service.roast_design(body.imageData, user_id=body.userId)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error roasting design")
        raise HTTPException(status_code=500, detail="Failed to analyze design")


@router.get("/roasts/{roast_id}", response_model=StoredDesignRoast)
def get_design_roast(
    roast_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    return service.get_design_roast(roast_id)
