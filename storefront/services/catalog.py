from __future__ import annotations

from typing import Any, List

from storefront.services.request import Request
from storefront.stores.models import Product


def _payload(response: Any) -> Any:
    # endpoints answer either with the bare payload or {message, data}
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


async def fetch_products(request: Request) -> List[Product]:
    rows = _payload(await request.get("/products")) or []
    if isinstance(rows, dict):
        rows = rows.get("list") or rows.get("items") or []
    return [Product.from_dict(r) for r in rows]


async def fetch_product(request: Request, product_id: Any) -> Product:
    return Product.from_dict(_payload(await request.get(f"/products/{product_id}")))
