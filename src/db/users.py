from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

import bcrypt

from db.database import KeyValueStore
from db.models import User
from db.repositories import UserRepository
from utils.config import Settings
from utils.errors import ErrorKind, Result
from utils.logger import get_logger
from utils.pure import derive_username

_logger = get_logger(__name__)

ADMIN_USER_ID = 1
# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds)).decode(
        "ascii"
    )


def _check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            _password_bytes(password), password_hash.encode("ascii")
        )
    except ValueError:
        # not a bcrypt hash
        return False


class UserDirectory:
    """
    Registered accounts, stored as one JSON list plus a next-id counter.

    Email, full name and username are unique ignoring case.
    """

    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.repo = UserRepository(store)

    async def initialize(self) -> bool:
        """Seed the administrator if no user list exists yet.

        Returns True when the seed was written.
        """
        if await self.repo.exists():
            return False
        admin = User(
            id=ADMIN_USER_ID,
            username=derive_username(self.settings.admin_name),
            full_name=self.settings.admin_name,
            email=self.settings.admin_email,
            mobile_phone="",
            password_hash=await asyncio.to_thread(
                _hash_password,
                self.settings.admin_password,
                self.settings.bcrypt_rounds,
            ),
            created_at=datetime.now(timezone.utc),
            is_admin=True,
        )
        await self.repo.save([admin])
        await self.repo.save_next_id(ADMIN_USER_ID + 1)
        _logger.info(f"Seeded administrator account '{admin.username}'.")
        return True

    async def add_user(
        self,
        full_name: str,
        email: str,
        mobile_phone: str,
        password: str,
        username: Optional[str] = None,
    ) -> Result[User]:
        users = await self.repo.load()
        candidate = derive_username(username if username else full_name)

        email_key = email.lower()
        if any(u.email.lower() == email_key for u in users):
            return Result.fail(
                ErrorKind.DUPLICATE_EMAIL,
                "Email already registered. Please use a different email or login.",
            )

        name_key = full_name.lower()
        if any(u.full_name.lower() == name_key for u in users):
            return Result.fail(
                ErrorKind.DUPLICATE_FULL_NAME,
                "An account with this name already exists. Please login instead.",
            )

        taken = {u.username.lower() for u in users}
        if candidate in taken:
            suffix = 1
            while f"{candidate}{suffix}" in taken:
                suffix += 1
            candidate = f"{candidate}{suffix}"

        next_id = await self.repo.load_next_id()
        # never hand out an id that is already in the list
        if users:
            next_id = max(next_id, max(u.id for u in users) + 1)

        user = User(
            id=next_id,
            username=candidate,
            full_name=full_name,
            email=email,
            mobile_phone=mobile_phone,
            password_hash=await asyncio.to_thread(
                _hash_password, password, self.settings.bcrypt_rounds
            ),
            created_at=datetime.now(timezone.utc),
            is_admin=False,
        )
        await self.repo.save_next_id(next_id + 1)
        await self.repo.save([*users, user])
        _logger.info(f"Registered user #{user.id} '{user.username}'.")
        return Result.ok(user, f"Welcome, {user.full_name}!")

    async def find_user(self, identifier: str) -> Optional[User]:
        """Match username, full name or email, ignoring case."""
        key = (identifier or "").lower()
        if not key:
            return None
        for user in await self.repo.load():
            if (
                user.username.lower() == key
                or user.full_name.lower() == key
                or user.email.lower() == key
            ):
                return user
        return None

    async def validate_login(self, identifier: str, password: str) -> Result[User]:
        user = await self.find_user(identifier)
        if user is not None and await asyncio.to_thread(
            _check_password, password, user.password_hash
        ):
            _logger.info(f"User '{user.username}' authenticated.")
            return Result.ok(user)
        _logger.debug(f"Failed login for '{identifier}'.")
        return Result.fail(
            ErrorKind.INVALID_CREDENTIALS, "Invalid username or password."
        )

    async def get_user(self, user_id: int) -> Optional[User]:
        for user in await self.repo.load():
            if user.id == user_id:
                return user
        return None

    async def all_users(self) -> List[User]:
        return await self.repo.load()
