from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from storefront.utils.validators import require_positive_number

# product fields we read; anything else the backend sends rides along in `extra`
_PRODUCT_FIELDS = ("id", "name", "price", "stock")


@dataclass
class Product:
    id: Any
    name: str
    price: float
    stock: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=data["id"],
            name=str(data.get("name", "")),
            price=float(data.get("price", 0) or 0),
            stock=int(data.get("stock", 0) or 0),
            extra={k: v for k, v in data.items() if k not in _PRODUCT_FIELDS and k != "quantity"},
        )

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.extra)
        d.update(id=self.id, name=self.name, price=self.price, stock=self.stock)
        return d


@dataclass
class CartItem(Product):
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "CartItem":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            extra=dict(product.extra),
            quantity=quantity,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        p = Product.from_dict(data)
        quantity = int(data.get("quantity", 1))
        require_positive_number(quantity, "quantity")
        return cls.from_product(p, quantity)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["quantity"] = self.quantity
        return d

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
