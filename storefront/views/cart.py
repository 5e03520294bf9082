from __future__ import annotations

from typing import TYPE_CHECKING

from storefront.router.routes import RouteLocation
from storefront.utils.formatters import cart_line, money

if TYPE_CHECKING:
    from storefront.context import Storefront


async def cart_page(sf: "Storefront", location: RouteLocation) -> str:
    if not sf.cart.cart:
        return "🛒 Cart is empty."
    lines = ["🛒 <b>Cart</b>"]
    lines.extend(cart_line(it) for it in sf.cart.cart)
    lines.append(f"\n<b>Total: {money(sf.cart.total_amount)}</b>")
    return "\n".join(lines)


async def payment_page(sf: "Storefront", location: RouteLocation) -> str:
    return f"<b>Payment</b>\nAmount due: {money(sf.cart.total_amount)}"
