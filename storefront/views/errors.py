from __future__ import annotations

from typing import TYPE_CHECKING

from aiogram.utils.text_decorations import html_decoration

hquote = html_decoration.quote

from storefront.router.routes import RouteLocation

if TYPE_CHECKING:
    from storefront.context import Storefront


async def not_found_page(sf: "Storefront", location: RouteLocation) -> str:
    return f"404 — {hquote(location.path)} not found. /go /home"
