"""
User storage.

Two implementations of IUserRepository:
- InMemoryUserRepository: for development and tests
- SupabaseUserRepository: the ``users`` table (see migrations/001_create_users.sql)
"""

from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION

from .exceptions import DuplicateUserError
from .models import User, UserRole


class InMemoryUserRepository:
    """User storage kept in process memory."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user.model_copy()
        return None

    async def get_by_provider(self, provider: str, provider_user_id: str) -> Optional[User]:
        for user in self._users.values():
            if user.provider == provider and user.provider_user_id == provider_user_id:
                return user.model_copy()
        return None

    async def create(self, user: User) -> User:
        if any(existing.email == user.email for existing in self._users.values()):
            raise DuplicateUserError(user.email)
        self._users[user.id] = user.model_copy()
        return user.model_copy()

    async def update(self, user: User) -> User:
        stored = user.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self._users[user.id] = stored
        return stored.model_copy()


class SupabaseUserRepository(BaseRepository[User]):
    """
    User storage in the Supabase ``users`` table.

    Email uniqueness is enforced by a unique index on ``email``; a
    violation on insert surfaces as DuplicateUserError.
    """

    TABLE = "users"

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table(self.TABLE).select("*").eq("id", user_id).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        result = self._db.table(self.TABLE).select("*").eq("email", email).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    async def get_by_provider(self, provider: str, provider_user_id: str) -> Optional[User]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("provider", provider)
            .eq("provider_user_id", provider_user_id)
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    async def create(self, user: User) -> User:
        try:
            result = self._db.table(self.TABLE).insert(self._to_row(user)).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateUserError(user.email) from e
            raise
        return self._map_to_user(result.data[0])

    async def update(self, user: User) -> User:
        row = self._to_row(user)
        row["updated_at"] = datetime.now(timezone.utc).isoformat()
        del row["id"]
        result = self._db.table(self.TABLE).update(row).eq("id", user.id).execute()
        return self._map_to_user(result.data[0])

    @staticmethod
    def _to_row(user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "password_hash": user.password_hash,
            "is_verified": user.is_verified,
            "role": user.role.value,
            "provider": user.provider,
            "provider_user_id": user.provider_user_id,
            "last_login": user.last_login.isoformat() if user.last_login else None,
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
        }

    def _map_to_user(self, row: dict[str, Any]) -> User:
        return User(
            id=str(row["id"]),
            email=row["email"],
            name=row["name"],
            password_hash=row.get("password_hash"),
            is_verified=row.get("is_verified", False),
            role=UserRole(row.get("role") or UserRole.USER.value),
            provider=row.get("provider"),
            provider_user_id=row.get("provider_user_id"),
            last_login=self._parse_datetime(row.get("last_login")),
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )
