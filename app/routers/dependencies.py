from fastapi import Request

from ..application.services.analysis_service import AnalysisService
from ..application.services.profile_service import ProfileService


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.analysis_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service
