from typing import Optional
from sqlalchemy.engine import Engine

from .....db.models import UserProfile
from .....db.session import session_scope
from .....application.ports.user_repo import UserRepository, UserProfileDto

class SqlUserRepository(UserRepository):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_dto(self, profile: UserProfile) -> UserProfileDto:
        return UserProfileDto(
            uid=profile.uid,
            username=profile.username,
            created_at=profile.created_at,
        )

    def get_by_uid(self, uid: str) -> Optional[UserProfileDto]:
        with session_scope(self.engine) as session:
            profile = session.get(UserProfile, uid)
            return self._to_dto(profile) if profile else None

    def create(self, uid: str, username: str) -> UserProfileDto:
        profile = UserProfile(uid=uid, username=username)
        with session_scope(self.engine) as session:
            session.add(profile)
            session.commit()
            session.refresh(profile)
            return self._to_dto(profile)
