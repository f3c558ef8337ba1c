from typing import Protocol, Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserProfileDto:
    uid: str
    username: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "username": self.username,
            "createdAt": self.created_at.isoformat(),
        }


class UserRepository(Protocol):
    def get_by_uid(self, uid: str) -> Optional[UserProfileDto]:
        ...

    def create(self, uid: str, username: str) -> UserProfileDto:
        ...
