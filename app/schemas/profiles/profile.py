# app/schemas/profile.py
from pydantic import BaseModel
from typing import Optional


class UserProfileCreate(BaseModel):
    uid: Optional[str] = None
    username: Optional[str] = None


class UserProfileResponse(BaseModel):
    uid: str
    username: str
    createdAt: str
