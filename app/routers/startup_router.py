from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.analysis_service import AnalysisService
from ..schemas.startup.startup import StartupAnalyzeRequest, StartupAnalysisResult, StoredStartupAnalysis
from ..schemas.common.common import ErrorResponse
from .dependencies import get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/startup", tags=["Startup Lab"])


@router.post("/analyze", response_model=StartupAnalysisResult, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def analyze_startup(
    body: StartupAnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Market fit, tech stack and competitors for a startup idea."""
    try:
        return await service.analyze_startup(body.idea, user_id=body.userId)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error analyzing startup idea")
        raise HTTPException(status_code=500, detail="Failed to analyze startup idea")


@router.get("/analyses/{analysis_id}", response_model=StoredStartupAnalysis)
def get_startup_analysis(
    analysis_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    return service.get_startup_analysis(analysis_id)
