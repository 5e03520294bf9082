"""Hash-addressed client-side router with an auth guard.

Navigation runs: resolve -> before_each (title + auth check) -> load the
route component -> commit to history and apply the scroll policy. Any
exception along the way goes to ``on_error``; a component module that can no
longer be imported forces ``Document.reload()``.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from typing import Any, Callable, Dict, List, Optional

from storefront.config import settings
from storefront.constants import DYNAMIC_IMPORT_FAILURE, MSG_LOGIN_REQUIRED
from storefront.db.storage import KeyValueStorage
from storefront.router.guard import Allowed, GuardDecision, RedirectedTo, guard
from storefront.router.routes import MAX_REDIRECTS, ROUTES, RouteLocation, RouteRecord, RouteTable, href
from storefront.services.notify import Notifier
from storefront.stores.user import load_persisted_user

logger = logging.getLogger(__name__)

ScrollPosition = Dict[str, int]
TOP: ScrollPosition = {"top": 0}


class DynamicImportError(ImportError):
    """A route component module could not be loaded (stale or missing build)."""


class Document:
    """What a page would expose as `document` / `window`: title, scroll, reload."""

    def __init__(self, title: str = "") -> None:
        self.title = title
        self.scroll: ScrollPosition = dict(TOP)
        self.location_hash = ""
        self.reload_count = 0
        self._reload_hooks: List[Callable[[], None]] = []

    def on_reload(self, hook: Callable[[], None]) -> None:
        self._reload_hooks.append(hook)

    def reload(self) -> None:
        self.reload_count += 1
        logger.warning("Reloading application")
        for hook in self._reload_hooks:
            hook()


async def load_component(spec: str) -> Any:
    module_name, _, attr = spec.partition(":")
    try:
        module = await asyncio.to_thread(importlib.import_module, module_name)
    except ImportError as e:
        raise DynamicImportError(f"{DYNAMIC_IMPORT_FAILURE}: {module_name}") from e
    return getattr(module, attr) if attr else module


def scroll_behavior(
    to: RouteLocation, from_: Optional[RouteLocation], saved_position: Optional[ScrollPosition]
) -> ScrollPosition:
    if saved_position:
        return dict(saved_position)
    return dict(TOP)


class Router:
    def __init__(
        self,
        durable: KeyValueStorage,
        notifier: Notifier,
        document: Document,
        routes: List[RouteRecord] = ROUTES,
        brand_title: str = settings.brand_title,
    ) -> None:
        self.durable = durable
        self.notifier = notifier
        self.document = document
        self.table = RouteTable(routes)
        self.brand_title = brand_title
        self.history: List[RouteLocation] = []
        self.index = -1
        self.view: Any = None
        self._saved_scroll: Dict[int, ScrollPosition] = {}

    @property
    def current(self) -> Optional[RouteLocation]:
        if 0 <= self.index < len(self.history):
            return self.history[self.index]
        return None

    def resolve(self, path: str) -> RouteLocation:
        return self.table.resolve(path)

    def reset(self) -> None:
        self.history = []
        self.index = -1
        self.view = None
        self._saved_scroll = {}

    # ---------------- hooks ----------------

    def before_each(self, to: RouteLocation, from_: Optional[RouteLocation]) -> GuardDecision:
        self.document.title = to.record.title or self.brand_title

        # checked against storage on purpose, not the in-memory session
        user = load_persisted_user(self.durable)
        decision = guard(to, user is not None)
        if isinstance(decision, RedirectedTo):
            logger.info("Auth required for %s, redirecting to %s", to.path, decision.path)
            self.notifier.warning(MSG_LOGIN_REQUIRED)
        else:
            logger.info("Navigation allowed: %s", to.path)
        return decision

    def on_error(self, error: Exception) -> None:
        logger.error("Router error: %s", error)
        if isinstance(error, DynamicImportError) or DYNAMIC_IMPORT_FAILURE in str(error):
            self.document.reload()

    # ---------------- navigation ----------------

    async def push(self, path: str) -> Optional[RouteLocation]:
        return await self._navigate(path)

    async def replace(self, path: str) -> Optional[RouteLocation]:
        return await self._navigate(path, replace=True)

    async def go(self, delta: int) -> Optional[RouteLocation]:
        target = self.index + delta
        if delta == 0 or not 0 <= target < len(self.history):
            return None
        return await self._navigate(self.history[target].full_path, pop_to=target)

    async def back(self) -> Optional[RouteLocation]:
        return await self.go(-1)

    async def forward(self) -> Optional[RouteLocation]:
        return await self.go(1)

    async def _navigate(
        self, path: str, *, replace: bool = False, pop_to: Optional[int] = None
    ) -> Optional[RouteLocation]:
        from_ = self.current
        try:
            to = self.resolve(path)
            redirected = False
            for _ in range(MAX_REDIRECTS):
                decision = self.before_each(to, from_)
                if isinstance(decision, Allowed):
                    break
                to = self.resolve(decision.path)
                redirected = True
            else:
                raise RuntimeError(f"navigation to {path} redirected too many times")

            view = await load_component(to.record.component) if to.record.component else None
        except Exception as e:
            self.on_error(e)
            return None

        if from_ is not None:
            self._saved_scroll[self.index] = dict(self.document.scroll)

        saved: Optional[ScrollPosition] = None
        if pop_to is not None and not redirected:
            self.index = pop_to
            self.history[pop_to] = to
            saved = self._saved_scroll.get(pop_to)
        elif replace and from_ is not None:
            self.history[self.index] = to
        else:
            del self.history[self.index + 1:]
            self.history.append(to)
            self.index = len(self.history) - 1
            for i in [k for k in self._saved_scroll if k >= self.index]:
                del self._saved_scroll[i]

        self.view = view
        self.document.location_hash = href(to.full_path)
        self.document.scroll = scroll_behavior(to, from_, saved)
        return to
