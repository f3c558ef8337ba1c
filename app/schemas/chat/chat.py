# app/schemas/chat.py
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class Persona(str, Enum):
    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"


class PersonaChatRequest(BaseModel):
    message: Optional[str] = None
    # Checked against Persona by the service so the client gets a readable 400
    persona: Optional[str] = None
    userId: Optional[str] = None


class PersonaReply(BaseModel):
    response: str = Field(..., min_length=1)


class StoredChatMessage(BaseModel):
    id: str
    sender: str
    message: str
    userId: str
    createdAt: str


class ChatHistoryResponse(BaseModel):
    messages: List[StoredChatMessage]
