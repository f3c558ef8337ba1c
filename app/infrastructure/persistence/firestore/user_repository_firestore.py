from datetime import datetime, timezone
from typing import Optional

from ....application.ports.user_repo import UserRepository, UserProfileDto

USERS_COLLECTION = "users"


class FirestoreUserRepository(UserRepository):
    def __init__(self, client):
        self.client = client

    def get_by_uid(self, uid: str) -> Optional[UserProfileDto]:
        snapshot = self.client.collection(USERS_COLLECTION).document(uid).get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return UserProfileDto(
            uid=uid,
            username=data.get("username", ""),
            created_at=data.get("createdAt") or datetime.now(timezone.utc),
        )

    def create(self, uid: str, username: str) -> UserProfileDto:
        created_at = datetime.now(timezone.utc)
        self.client.collection(USERS_COLLECTION).document(uid).set({
            "uid": uid,
            "username": username,
            "createdAt": created_at,
        })
        return UserProfileDto(uid=uid, username=username, created_at=created_at)
