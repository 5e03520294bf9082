from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio

from storefront.bot import handlers
from storefront.config import settings
from storefront.context import Storefront

from conftest import json_response


class FakeMessage:
    def __init__(self, text: str, user_id: int = settings.admin_id) -> None:
        self.text = text
        self.from_user = SimpleNamespace(id=user_id)
        self.answers: list[str] = []

    async def answer(self, text: str, **kwargs) -> None:
        self.answers.append(text)


def backend(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/products/1":
        return json_response(200, {"id": 1, "name": "tea", "price": 2.0, "stock": 2})
    if request.url.path == "/api/auth/login":
        return json_response(200, {"message": "登录成功", "data": {"id": 1}})
    return json_response(404, {"message": "not found"})


@pytest_asyncio.fixture
async def sf(test_settings, durable, tab):
    storefront = Storefront(test_settings, durable=durable, tab=tab, transport=httpx.MockTransport(backend))
    yield storefront
    await storefront.aclose()


@pytest.mark.asyncio
async def test_add_reports_notifications(sf) -> None:
    msg = FakeMessage("/add 1 2")
    await handlers.cmd_add(msg, sf)
    assert msg.answers[-1].startswith("✅ 已添加到购物车")

    msg = FakeMessage("/add 1")
    await handlers.cmd_add(msg, sf)
    assert msg.answers[-1] == "⚠️ 已达到最大库存数量"


@pytest.mark.asyncio
async def test_add_unknown_product_shows_backend_error(sf) -> None:
    msg = FakeMessage("/add 7")
    await handlers.cmd_add(msg, sf)
    assert msg.answers[-1] == "❌ not found"
    assert sf.cart.cart == []


@pytest.mark.asyncio
async def test_add_usage(sf) -> None:
    msg = FakeMessage("/add")
    await handlers.cmd_add(msg, sf)
    assert msg.answers[-1].startswith("Usage")


@pytest.mark.asyncio
async def test_go_to_protected_page_then_login(sf) -> None:
    msg = FakeMessage("/go /cart")
    await handlers.cmd_go(msg, sf)
    assert msg.answers[-1].startswith("⚠️ 请先登录\n📍 #/login")

    msg = FakeMessage("/login 123 pw remember")
    await handlers.cmd_login(msg, None, sf)
    assert msg.answers[-1] == "✅ 登录成功"

    msg = FakeMessage("/cart")
    await handlers.cmd_cart(msg, sf)
    assert "📍 #/cart" in msg.answers[-1]


@pytest.mark.asyncio
async def test_non_admin_is_ignored(sf) -> None:
    msg = FakeMessage("/cart_clear", user_id=settings.admin_id + 1)
    await handlers.cmd_cart_clear(msg, sf)
    assert msg.answers == []


@pytest.mark.asyncio
async def test_go_escapes_markup_in_reply(sf) -> None:
    msg = FakeMessage("/go /x<y>&z")
    await handlers.cmd_go(msg, sf)
    reply = msg.answers[-1]
    assert "/x&lt;y&gt;&amp;z" in reply
    assert "<y>" not in reply


@pytest.mark.asyncio
async def test_back_after_stale_module_returns_to_page(sf, monkeypatch) -> None:
    from storefront.router import router as router_module

    await handlers.cmd_go(FakeMessage("/go /home"), sf)
    await handlers.cmd_go(FakeMessage("/go /orders"), sf)
    real_load = router_module.load_component

    async def flaky(spec):
        if spec.endswith(":home_page"):
            raise router_module.DynamicImportError("Failed to fetch dynamically imported module: shop")
        return await real_load(spec)

    monkeypatch.setattr(router_module, "load_component", flaky)
    msg = FakeMessage("/back")
    await handlers.cmd_back(msg, sf)

    assert sf.document.reload_count == 1
    assert sf.router.current.path == "/orders"
    assert sf.pending_path is None
    assert "No orders to show." in msg.answers[-1]
