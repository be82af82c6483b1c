# load/save of each entity as JSON blobs under fixed store keys
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from db.database import KeyValueStore
from db.models import CartEntry, Session, User
from utils.logger import get_logger

_logger = get_logger(__name__)

USERS_KEY = "users"
NEXT_USER_ID_KEY = "nextUserId"
CURRENT_USER_ID_KEY = "currentUserId"
CURRENT_USERNAME_KEY = "currentUsername"
IS_LOGGED_IN_KEY = "isLoggedIn"
CART_KEY = "cart"

TRUE_MARKER = "true"
FALSE_MARKER = "false"


def _to_int(val) -> Optional[int]:
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


async def _load_json(store: KeyValueStore, key: str) -> Any:
    raw = await store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        _logger.warning(f"Ignoring malformed JSON under key '{key}'.")
        return None


class UserRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def exists(self) -> bool:
        """True once a user list has been written, even an empty one."""
        return await self.store.get(USERS_KEY) is not None

    async def load(self) -> List[User]:
        data = await _load_json(self.store, USERS_KEY)
        if not isinstance(data, list):
            return []
        users: List[User] = []
        for item in data:
            try:
                users.append(User.from_dict(item))
            except (KeyError, TypeError, ValueError):
                _logger.warning(f"Skipping malformed user record: {item!r}")
        return users

    async def save(self, users: List[User]) -> None:
        await self.store.set(USERS_KEY, json.dumps([u.to_dict() for u in users]))

    async def load_next_id(self) -> int:
        """Next id to hand out; a missing or garbled counter starts at 1."""
        value = _to_int(await self.store.get(NEXT_USER_ID_KEY))
        return value if value is not None and value > 0 else 1

    async def save_next_id(self, next_id: int) -> None:
        await self.store.set(NEXT_USER_ID_KEY, str(next_id))


class SessionRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def load(self) -> Session:
        return Session(
            current_user_id=_to_int(await self.store.get(CURRENT_USER_ID_KEY)),
            current_username=await self.store.get(CURRENT_USERNAME_KEY),
            logged_in_flag=await self.store.get(IS_LOGGED_IN_KEY) == TRUE_MARKER,
        )

    async def save_user(self, user: Optional[User]) -> None:
        if user is not None:
            await self.store.set(CURRENT_USER_ID_KEY, str(user.id))
            await self.store.set(CURRENT_USERNAME_KEY, user.username)
        else:
            await self.store.remove(CURRENT_USER_ID_KEY)
            await self.store.remove(CURRENT_USERNAME_KEY)

    async def save_flag(self, flag: bool) -> None:
        await self.store.set(IS_LOGGED_IN_KEY, TRUE_MARKER if flag else FALSE_MARKER)


class CartRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def load(self) -> Dict[str, CartEntry]:
        data = await _load_json(self.store, CART_KEY)
        if not isinstance(data, dict):
            return {}
        cart: Dict[str, CartEntry] = {}
        for product_id, item in data.items():
            try:
                entry = CartEntry.from_dict({"id": product_id, **item})
            except (KeyError, TypeError, ValueError):
                _logger.warning(f"Skipping malformed cart entry '{product_id}'.")
                continue
            if entry.quantity < 1:
                continue
            cart[str(product_id)] = entry
        return cart

    async def save(self, cart: Dict[str, CartEntry]) -> None:
        await self.store.set(
            CART_KEY, json.dumps({pid: e.to_dict() for pid, e in cart.items()})
        )
