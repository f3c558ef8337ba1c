# app/db/models/users/profile.py
from sqlmodel import SQLModel, Field
from datetime import datetime

class UserProfile(SQLModel, table=True):
    __tablename__ = "user_profiles"
    uid: str = Field(max_length=128, primary_key=True)  # Firebase Authentication uid
    username: str = Field(max_length=100)
    created_at: datetime = Field(default_factory=datetime.utcnow)
