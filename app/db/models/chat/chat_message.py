# app/db/models/chat/chat_message.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=128, index=True)
    sender: str = Field(max_length=16)  # user, past, present, future
    message: str
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
