from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from db.cart import CartManager
from db.catalog import ProductCatalog
from db.database import KeyValueStore
from db.models import User
from db.repositories import SessionRepository
from db.users import UserDirectory
from utils.config import Settings
from utils.logger import get_logger
from utils.payment import CheckoutSimulator
from utils.prompts import Confirm, ask

_logger = get_logger(__name__)


class SessionManager:
    """
    The single login session of this store: who is logged in, and whether.

    A session only counts as logged in when the flag is set AND the stored
    user id still resolves to a registered user.
    """

    def __init__(self, store: KeyValueStore, users: UserDirectory) -> None:
        self.repo = SessionRepository(store)
        self.users = users
        self._redirect: Optional[str] = None

    async def set_current_user(self, user: Optional[User]) -> None:
        await self.repo.save_user(user)

    async def get_current_user(self) -> Optional[User]:
        session = await self.repo.load()
        if session.current_user_id is None:
            return None
        return await self.users.get_user(session.current_user_id)

    async def is_logged_in(self) -> bool:
        session = await self.repo.load()
        if not session.logged_in_flag or session.current_user_id is None:
            return False
        return await self.users.get_user(session.current_user_id) is not None

    async def set_logged_in(self, flag: bool, user: Optional[User] = None) -> None:
        if flag and user is None:
            raise ValueError("Logging in requires a user.")
        await self.repo.save_flag(flag)
        if flag:
            await self.set_current_user(user)
            _logger.info(f"User '{user.username}' logged in.")
        else:
            await self.set_current_user(None)

    async def logout(self, confirm: Confirm) -> bool:
        """
        End the session once the user confirms.
        Returns True if logged out; the caller then shows the entry screen.
        """
        if not await ask(confirm, "Are you sure you want to logout?"):
            return False
        user = await self.get_current_user()
        await self.set_logged_in(False)
        _logger.info(f"User '{user.username if user else '?'}' logged out.")
        return True

    def remember_redirect(self, target: str) -> None:
        """Where to go after the next successful login."""
        self._redirect = target

    def pop_redirect(self) -> Optional[str]:
        target, self._redirect = self._redirect, None
        return target


@dataclass
class GlobalState:
    """
    Service handles shared by screens.

    Fields:
      - store: the key-value store every service persists through
      - users, session, cart, checkout: the storefront services
      - catalog: read-only product lookup
    """

    settings: Settings = field(default_factory=Settings)
    catalog: ProductCatalog = field(default_factory=ProductCatalog)
    store: KeyValueStore = field(init=False)
    users: UserDirectory = field(init=False)
    session: SessionManager = field(init=False)
    cart: CartManager = field(init=False)
    checkout: CheckoutSimulator = field(init=False)

    def __post_init__(self) -> None:
        self.store = KeyValueStore(self.settings.db_path)
        self.users = UserDirectory(self.store, self.settings)
        self.session = SessionManager(self.store, self.users)
        self.cart = CartManager(self.store, self.catalog, self.session)
        self.checkout = CheckoutSimulator(self.settings.checkout_delay)

    async def start(self) -> None:
        """Seed the user list if needed and load the persisted cart."""
        await self.users.initialize()
        await self.cart.load()
        _logger.info(
            f"Storefront ready: {len(self.catalog)} products, "
            f"{self.cart.cart_count()} item(s) in cart."
        )
