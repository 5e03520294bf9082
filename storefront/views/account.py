from __future__ import annotations

from typing import TYPE_CHECKING

from aiogram.utils.text_decorations import html_decoration

hquote = html_decoration.quote

from storefront.router.routes import RouteLocation

if TYPE_CHECKING:
    from storefront.context import Storefront


async def login_page(sf: "Storefront", location: RouteLocation) -> str:
    if sf.user.is_authenticated:
        return "You are signed in. /logout to switch account."
    return "Sign in: /login PHONE PASSWORD [remember]"


async def profile_page(sf: "Storefront", location: RouteLocation) -> str:
    user = sf.user.user
    if not user:
        # persisted record exists but the store was not rehydrated (tab tier only)
        return "Profile unavailable. /login again."
    lines = ["<b>Profile</b>"]
    for k, v in sorted(user.items()):
        lines.append(f"{hquote(str(k))}: {hquote(str(v))}")
    lines.append(f"remember me: {'yes' if sf.user.remember_me else 'no'}")
    return "\n".join(lines)


async def orders_page(sf: "Storefront", location: RouteLocation) -> str:
    return "<b>Orders</b>\nNo orders to show."


async def my_orders_page(sf: "Storefront", location: RouteLocation) -> str:
    return "<b>My orders</b>\nNo orders yet."
