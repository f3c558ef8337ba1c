# app/db/models/analysis/startup_analysis.py
from typing import Optional, List
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field
from datetime import datetime

class StartupAnalysis(SQLModel, table=True):
    __tablename__ = "startup_analyses"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=128, index=True)
    idea: str
    analysis: str
    market_fit: int
    tech_stack: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    competitors: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    emoji: str = Field(max_length=16)
    created_at: datetime = Field(default_factory=datetime.utcnow)
