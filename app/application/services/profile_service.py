from dataclasses import dataclass
from typing import Any, Optional
from fastapi import HTTPException

from ..ports.user_repo import UserRepository, UserProfileDto


@dataclass
class ProfileService:
    user_repo: Optional[UserRepository]

    def ensure_profile(self, uid: Any, username: Any) -> UserProfileDto:
        """Create the profile for ``uid`` unless it exists; profiles are never updated."""
        repo = self._require_repo()
        if not isinstance(uid, str) or not uid.strip():
            raise HTTPException(status_code=400, detail="Please provide a valid uid")
        if not isinstance(username, str) or not username.strip():
            raise HTTPException(status_code=400, detail="Please provide a username")
        existing = repo.get_by_uid(uid)
        if existing is not None:
            return existing
        return repo.create(uid, username.strip())

    def get_profile(self, uid: str) -> UserProfileDto:
        profile = self._require_repo().get_by_uid(uid)
        if profile is None:
            raise HTTPException(status_code=404, detail="User not found")
        return profile

    def _require_repo(self) -> UserRepository:
        if self.user_repo is None:
            raise HTTPException(status_code=503, detail="Persistence is not configured")
        return self.user_repo
