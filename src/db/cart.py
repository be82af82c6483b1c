from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Optional

from db.catalog import ProductCatalog
from db.database import KeyValueStore
from db.models import CartEntry
from db.repositories import CartRepository
from utils.errors import ErrorKind, Result
from utils.logger import get_logger
from utils.prompts import Confirm, ask
from utils.pure import CENTS, parse_price

if TYPE_CHECKING:
    from utils.state import SessionManager

_logger = get_logger(__name__)


class CartManager:
    """
    Product id -> CartEntry, mirrored in memory and saved after every change.

    Quantities are always >= 1; an entry that would drop to 0 is removed.
    The cart belongs to the store, not to whoever is logged in.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: ProductCatalog,
        session: SessionManager,
    ) -> None:
        self.repo = CartRepository(store)
        self.catalog = catalog
        self.session = session
        self._entries: Dict[str, CartEntry] = {}
        self._save_lock = asyncio.Lock()

    async def load(self) -> None:
        self._entries = await self.repo.load()

    async def save(self) -> None:
        # one write at a time, each writing the entries current when it starts
        async with self._save_lock:
            await self.repo.save(self._entries)

    # ---------------------------
    # Queries
    # ---------------------------

    def entries(self) -> List[CartEntry]:
        return list(self._entries.values())

    def get(self, product_id: str) -> Optional[CartEntry]:
        return self._entries.get(product_id)

    def is_empty(self) -> bool:
        return not self._entries

    def cart_count(self) -> int:
        return sum(e.quantity for e in self._entries.values())

    def cart_total(self) -> Decimal:
        total = Decimal("0")
        for entry in self._entries.values():
            price = parse_price(entry.product.price)
            if price is None:
                _logger.warning(
                    f"Cannot parse price {entry.product.price!r} of "
                    f"'{entry.product_id}', counting it as 0."
                )
                continue
            total += price * entry.quantity
        return total.quantize(CENTS)

    # ---------------------------
    # Mutations
    # ---------------------------

    async def add_to_cart(self, product_id: str) -> Result[CartEntry]:
        if not await self.session.is_logged_in():
            return Result.fail(
                ErrorKind.NOT_AUTHENTICATED,
                "Please login or signup to add items to cart.",
            )

        product = self.catalog.get(product_id)
        if product is None:
            _logger.error(f"Product not found: {product_id}")
            return Result.fail(
                ErrorKind.PRODUCT_NOT_FOUND, f"Product not found: {product_id}"
            )

        entry = self._entries.get(product_id)
        if entry is not None:
            entry = entry.with_quantity(entry.quantity + 1)
        else:
            entry = CartEntry(product=product, quantity=1)
        self._entries[product_id] = entry
        await self.save()
        _logger.debug(f"Cart: {product_id} x{entry.quantity}")
        return Result.ok(entry, f"{product.name} added to cart!")

    async def remove_from_cart(self, product_id: str) -> None:
        if self._entries.pop(product_id, None) is None:
            return
        await self.save()
        _logger.debug(f"Cart: removed {product_id}")

    async def update_quantity(self, product_id: str, new_quantity: int) -> None:
        entry = self._entries.get(product_id)
        if entry is None:
            return
        if new_quantity <= 0:
            await self.remove_from_cart(product_id)
            return
        self._entries[product_id] = entry.with_quantity(new_quantity)
        await self.save()
        _logger.debug(f"Cart: {product_id} x{new_quantity}")

    async def adjust_quantity(self, product_id: str, delta: int) -> None:
        """Step the current quantity by delta, e.g. the cart's +1/-1 controls."""
        entry = self._entries.get(product_id)
        if entry is None:
            return
        # the in-memory write happens before the first await
        await self.update_quantity(product_id, entry.quantity + delta)

    async def clear_cart(self, confirm: Confirm) -> Result[None]:
        if not self._entries:
            return Result.fail(None, "Your cart is already empty.")
        if not await ask(
            confirm, "Are you sure you want to remove all items from your cart?"
        ):
            return Result.fail(None, "Your cart was left unchanged.")
        await self.empty()
        return Result.ok(message="All items have been removed from your cart.")

    async def empty(self) -> None:
        """Drop every entry without asking, e.g. after a completed payment."""
        self._entries = {}
        await self.save()
        _logger.debug("Cart emptied.")
