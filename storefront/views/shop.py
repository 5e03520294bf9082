from __future__ import annotations

from typing import TYPE_CHECKING

from aiogram.utils.text_decorations import html_decoration

hquote = html_decoration.quote

from storefront.router.routes import RouteLocation
from storefront.services.catalog import fetch_product, fetch_products
from storefront.utils.formatters import money

if TYPE_CHECKING:
    from storefront.context import Storefront


async def home_page(sf: "Storefront", location: RouteLocation) -> str:
    user = sf.user.user or {}
    who = user.get("name") or user.get("phone")
    lines = [f"<b>{hquote(sf.document.title)}</b>"]
    lines.append(f"Hello, {hquote(str(who))}!" if who else "Welcome! /login to sign in.")
    lines.append(f"Cart: {sf.cart.item_count} item(s), {money(sf.cart.total_amount)}")
    lines.append("/products — catalog")
    return "\n".join(lines)


async def products_page(sf: "Storefront", location: RouteLocation) -> str:
    products = await fetch_products(sf.request)
    if not products:
        return "No products yet."
    lines = ["<b>Products:</b>"]
    for p in products:
        lines.append(f"• #{hquote(str(p.id))} {hquote(p.name)} — {money(p.price)} (stock {p.stock})")
    lines.append("\n/add ID [QTY] — add to cart")
    return "\n".join(lines)


async def product_detail_page(sf: "Storefront", location: RouteLocation) -> str:
    p = await fetch_product(sf.request, location.params["id"])
    in_cart = sf.cart.find(p.id)
    lines = [
        f"<b>{hquote(p.name)}</b> (#{hquote(str(p.id))})",
        f"Price: {money(p.price)}",
        f"Stock: {p.stock}",
    ]
    if in_cart:
        lines.append(f"In cart: {in_cart.quantity}")
    return "\n".join(lines)


async def snake_page(sf: "Storefront", location: RouteLocation) -> str:
    return "🐍 Snake is only playable in the browser."
