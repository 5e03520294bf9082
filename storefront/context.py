from __future__ import annotations

import logging
from typing import Optional

import httpx

from storefront.config import Settings, settings as default_settings
from storefront.db.sqlite import SqliteStorage
from storefront.db.storage import KeyValueStorage, MemoryStorage
from storefront.router.router import Document, Router
from storefront.router.routes import RouteLocation
from storefront.services.notify import Notifier
from storefront.services.request import Request
from storefront.stores.cart import CartStore
from storefront.stores.user import UserStore

logger = logging.getLogger(__name__)


class Storefront:
    """
    One browser tab worth of state: storage tiers, notification channel,
    backend client, session and cart stores, document and router.
    """

    def __init__(
        self,
        settings: Settings = default_settings,
        durable: Optional[KeyValueStorage] = None,
        tab: Optional[KeyValueStorage] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.durable = durable if durable is not None else SqliteStorage(settings.storage_path)
        self.tab = tab if tab is not None else MemoryStorage()
        self.notifier = Notifier()
        self.request = Request(settings.api_base_url, settings.request_timeout, self.notifier, transport=transport)
        self.document = Document(settings.brand_title)
        self.router = Router(self.durable, self.notifier, self.document, brand_title=settings.brand_title)
        self.document.on_reload(self._rehydrate)
        self._rehydrate()

    def _rehydrate(self) -> None:
        # a reload keeps both storage tiers and rebuilds everything in memory
        self.user = UserStore(self.durable, self.tab, self.request, self.notifier)
        self.cart = CartStore(self.durable, self.notifier)
        self.pending_path = self.router.current.full_path if self.router.current else None
        self.router.reset()

    def reload(self) -> None:
        self.document.reload()

    async def resume(self) -> None:
        """Re-open the page that was active before a reload."""
        path, self.pending_path = self.pending_path, None
        if path:
            await self.router.push(path)

    async def navigate(self, path: str) -> Optional[str]:
        reloads = self.document.reload_count
        loc = await self.router.push(path)
        if loc is None and self.document.reload_count != reloads:
            await self.resume()
        return await self.render()

    async def go(self, delta: int) -> Optional[RouteLocation]:
        """History step; after a reload the previous page is re-opened instead."""
        reloads = self.document.reload_count
        loc = await self.router.go(delta)
        if loc is None and self.document.reload_count != reloads:
            await self.resume()
            return self.router.current
        return loc

    async def render(self) -> Optional[str]:
        loc = self.router.current
        if loc is None or self.router.view is None:
            return None
        return await self.router.view(self, loc)

    async def aclose(self) -> None:
        await self.request.aclose()
