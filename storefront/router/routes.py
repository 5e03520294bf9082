from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern
from urllib.parse import parse_qsl

from storefront.config import settings

BRAND = settings.brand_title
LOGIN_ROUTE = "/login"

_PARAM_RE = re.compile(r":(\w+)(?:\(([^)]*)\))?([*+?])?")
MAX_REDIRECTS = 10


@dataclass(frozen=True)
class RouteRecord:
    path: str
    name: Optional[str] = None
    component: Optional[str] = None  # "package.module:attr", imported on first visit
    redirect: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def requires_auth(self) -> bool:
        return bool(self.meta.get("requires_auth"))

    @property
    def title(self) -> Optional[str]:
        return self.meta.get("title")


@dataclass(frozen=True)
class RouteLocation:
    path: str
    record: RouteRecord
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    redirected_from: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self.record.name

    @property
    def meta(self) -> Dict[str, Any]:
        return self.record.meta

    @property
    def full_path(self) -> str:
        if not self.query:
            return self.path
        return self.path + "?" + "&".join(f"{k}={v}" for k, v in self.query.items())


ROUTES: List[RouteRecord] = [
    RouteRecord("/", redirect="/home", meta={"title": f"{BRAND} - 首页"}),
    RouteRecord("/login", "login", "storefront.views.account:login_page", meta={"title": f"{BRAND} - 登录"}),
    RouteRecord("/home", "home", "storefront.views.shop:home_page", meta={"title": f"{BRAND} - 首页"}),
    RouteRecord("/snake", "snake", "storefront.views.shop:snake_page"),
    RouteRecord("/products", "products", "storefront.views.shop:products_page"),
    RouteRecord("/orders", "orders", "storefront.views.account:orders_page"),
    RouteRecord("/product/:id", "ProductDetail", "storefront.views.shop:product_detail_page"),
    RouteRecord("/cart", "cart", "storefront.views.cart:cart_page", meta={"requires_auth": True}),
    RouteRecord("/profile", "profile", "storefront.views.account:profile_page", meta={"requires_auth": True}),
    RouteRecord("/my-orders", "myOrders", "storefront.views.account:my_orders_page", meta={"requires_auth": True}),
    RouteRecord("/payment", "payment", "storefront.views.cart:payment_page", meta={"requires_auth": True}),
    RouteRecord("/:pathMatch(.*)*", "NotFound", "storefront.views.errors:not_found_page", meta={"title": "页面未找到"}),
]


def compile_path(path: str) -> Pattern[str]:
    """`/product/:id` -> regex with named groups; `:name(re)` keeps a custom pattern."""
    pattern = ""
    pos = 0
    for m in _PARAM_RE.finditer(path):
        pattern += re.escape(path[pos:m.start()])
        name, custom, _ = m.groups()
        pattern += f"(?P<{name}>{custom or '[^/]+'})"
        pos = m.end()
    pattern += re.escape(path[pos:])
    return re.compile(f"^{pattern}/?$")


def normalize(path: str) -> str:
    """Accept `#/cart`, `/cart` or `cart`."""
    p = path.strip()
    if p.startswith("#"):
        p = p[1:]
    if not p.startswith("/"):
        p = "/" + p
    return p


def href(path: str) -> str:
    return "#" + normalize(path)


class RouteTable:
    def __init__(self, routes: List[RouteRecord]) -> None:
        self.routes = list(routes)
        self._compiled = [(compile_path(r.path), r) for r in self.routes]

    def match(self, path: str) -> Optional[tuple[RouteRecord, Dict[str, str]]]:
        for rx, record in self._compiled:
            m = rx.match(path)
            if m:
                return record, {k: v for k, v in m.groupdict().items() if v is not None}
        return None

    def resolve(self, path: str) -> RouteLocation:
        raw = normalize(path)
        redirected_from: Optional[str] = None
        for _ in range(MAX_REDIRECTS):
            p, _, qs = raw.partition("?")
            found = self.match(p)
            if found is None:
                raise LookupError(f"no route matches {p}")
            record, params = found
            if record.redirect is None:
                return RouteLocation(
                    path=p,
                    record=record,
                    params=params,
                    query=dict(parse_qsl(qs)),
                    redirected_from=redirected_from,
                )
            redirected_from = redirected_from or p
            raw = normalize(record.redirect)
        raise LookupError(f"too many redirects resolving {path}")
