# app/db/models/analysis/design_roast.py
from typing import Optional, List, Dict
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field
from datetime import datetime

class DesignRoast(SQLModel, table=True):
    __tablename__ = "design_roasts"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=128, index=True)
    image_url: Optional[str] = Field(max_length=255, default=None)
    title: str
    score: int
    feedback: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON))
    suggested_fix: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
