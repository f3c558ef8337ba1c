# app/schemas/design.py
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class FeedbackType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    WARNING = "warning"


class FeedbackItem(BaseModel):
    type: FeedbackType
    text: str = Field(..., min_length=1)


class DesignRoastRequest(BaseModel):
    imageData: Optional[str] = Field(None, description="Base64 image, plain or as a data URL")
    userId: Optional[str] = None


class DesignRoastResult(BaseModel):
    title: str = Field(..., min_length=1, description="Catchy title summarizing the critique")
    score: int = Field(..., ge=1, le=10, description="Overall design quality from 1 to 10")
    feedback: List[FeedbackItem] = Field(..., min_length=3, max_length=3)
    suggestedFix: str = Field(..., min_length=1)


class StoredDesignRoast(DesignRoastResult):
    id: str
    imageUrl: Optional[str] = None
    userId: str
    createdAt: str
