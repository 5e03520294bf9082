import pytest

from storefront.router.guard import Allowed, RedirectedTo, guard
from storefront.router.routes import ROUTES, RouteTable, compile_path, href, normalize


@pytest.fixture
def table() -> RouteTable:
    return RouteTable(ROUTES)


@pytest.mark.parametrize("path", ["/cart", "/profile", "/my-orders", "/payment"])
def test_protected_routes_need_a_session(table, path) -> None:
    target = table.resolve(path)
    assert guard(target, session_present=False) == RedirectedTo("/login")
    assert guard(target, session_present=True) == Allowed()


@pytest.mark.parametrize("path", ["/", "/login", "/home", "/snake", "/products", "/orders", "/product/3", "/nope"])
def test_public_routes_always_allowed(table, path) -> None:
    assert guard(table.resolve(path), session_present=False) == Allowed()


def test_root_redirects_to_home(table) -> None:
    loc = table.resolve("/")
    assert loc.path == "/home"
    assert loc.name == "home"
    assert loc.redirected_from == "/"


def test_params_query_and_fragment(table) -> None:
    loc = table.resolve("#/product/42?from=list")
    assert loc.name == "ProductDetail"
    assert loc.params == {"id": "42"}
    assert loc.query == {"from": "list"}
    assert loc.full_path == "/product/42?from=list"


def test_unknown_paths_hit_not_found(table) -> None:
    loc = table.resolve("/a/b/c")
    assert loc.name == "NotFound"
    assert loc.meta["title"] == "页面未找到"
    assert loc.params == {"pathMatch": "a/b/c"}


def test_trailing_slash_matches(table) -> None:
    assert table.resolve("/cart/").name == "cart"


def test_compile_path() -> None:
    rx = compile_path("/product/:id")
    assert rx.match("/product/7").group("id") == "7"
    assert rx.match("/product/7/extra") is None


def test_href_and_normalize() -> None:
    assert normalize("cart") == "/cart"
    assert normalize("#/cart") == "/cart"
    assert href("/cart") == "#/cart"
