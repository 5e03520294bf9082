from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from storefront.constants import (
    CART_KEY,
    CART_VISIBLE_KEY,
    MSG_ADDED,
    MSG_MAX_STOCK,
    MSG_OUT_OF_STOCK,
    MSG_REMOVED,
)
from storefront.db.storage import KeyValueStorage
from storefront.services.notify import Notifier
from storefront.stores.models import CartItem, Product
from storefront.utils.validators import require_positive_number

logger = logging.getLogger(__name__)


def _load_cart(storage: KeyValueStorage) -> List[CartItem]:
    raw = storage.get_item(CART_KEY)
    if not raw:
        return []
    try:
        rows = json.loads(raw)
        if not isinstance(rows, list):
            raise ValueError(f"cart must be a list, got {type(rows).__name__}")
        return [CartItem.from_dict(r) for r in rows]
    except (ValueError, TypeError, KeyError) as e:
        logger.error("Failed to parse saved cart: %s", e)
        storage.remove_item(CART_KEY)
        return []


class CartStore:
    """
    Cart line items plus panel visibility, written through to durable storage
    on every mutation. Items are unique by product id, in insertion order.
    """

    def __init__(self, storage: KeyValueStorage, notifier: Notifier) -> None:
        self.storage = storage
        self.notifier = notifier
        self.cart: List[CartItem] = _load_cart(storage)
        self.show_cart = False

    # ---------------- persistence ----------------

    def _save_cart(self) -> None:
        self.storage.set_item(CART_KEY, json.dumps([it.to_dict() for it in self.cart], ensure_ascii=False))

    def _save_visible(self) -> None:
        self.storage.set_item(CART_VISIBLE_KEY, "true" if self.show_cart else "false")

    # ---------------- derived ----------------

    @property
    def total_amount(self) -> float:
        return sum(it.price * it.quantity for it in self.cart)

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.cart)

    def find(self, product_id: Any) -> Optional[CartItem]:
        for it in self.cart:
            if it.id == product_id:
                return it
        return None

    # ---------------- mutations ----------------

    def add_to_cart(self, product: Product, quantity: int = 1) -> bool:
        require_positive_number(quantity, "quantity")
        if product.stock <= 0:
            self.notifier.warning(MSG_OUT_OF_STOCK)
            return False

        existing = self.find(product.id)
        current = existing.quantity if existing else 0
        if current + quantity > product.stock:
            self.notifier.warning(MSG_MAX_STOCK)
            return False

        if existing:
            existing.quantity += quantity
        else:
            self.cart.append(CartItem.from_product(product, quantity))

        self._save_cart()
        self.notifier.success(MSG_ADDED)
        return True

    def remove_from_cart(self, product_id: Any) -> bool:
        for i, it in enumerate(self.cart):
            if it.id == product_id:
                del self.cart[i]
                self._save_cart()
                self.notifier.success(MSG_REMOVED)
                return True
        return False

    def update_quantity(self, item: Product, delta: int) -> bool:
        # out-of-range results are dropped without a message
        existing = self.find(item.id)
        if not existing:
            return False
        new_quantity = existing.quantity + delta
        if not 0 < new_quantity <= item.stock:
            return False
        existing.quantity = new_quantity
        self._save_cart()
        return True

    def clear_cart(self) -> None:
        self.cart = []
        self.show_cart = False
        self.storage.remove_item(CART_KEY)
        self._save_visible()

    def toggle_cart(self) -> None:
        self.show_cart = not self.show_cart
        self._save_visible()

    def close_cart(self) -> None:
        self.show_cart = False
        self._save_visible()
