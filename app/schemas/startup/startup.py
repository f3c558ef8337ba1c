# app/schemas/startup.py
from pydantic import BaseModel, Field
from typing import List, Optional


class StartupAnalyzeRequest(BaseModel):
    idea: Optional[str] = None
    userId: Optional[str] = None


class StartupAnalysisResult(BaseModel):
    analysis: str = Field(..., min_length=1, description="Short assessment of the idea (2-3 sentences)")
    marketFit: int = Field(..., ge=1, le=100, description="Market potential from 1 to 100")
    techStack: List[str] = Field(..., min_length=1, description="Technologies suited to build the idea")
    competitors: List[str] = Field(..., min_length=1, description="Existing competitors or similar products")
    emoji: str = Field(..., min_length=1, max_length=1, description="Single emoji for the overall sentiment")


class StoredStartupAnalysis(StartupAnalysisResult):
    id: str
    idea: str
    userId: str
    createdAt: str
