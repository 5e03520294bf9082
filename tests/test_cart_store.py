import json
import random

import pytest

from storefront.services.notify import SUCCESS, WARNING
from storefront.stores.cart import CartStore
from storefront.stores.models import CartItem, Product


def _product(pid=1, price=10.0, stock=5, **extra) -> Product:
    return Product(id=pid, name=f"p{pid}", price=price, stock=stock, extra=extra)


@pytest.fixture
def cart(durable, notifier) -> CartStore:
    return CartStore(durable, notifier)


def _recomputed(store: CartStore) -> float:
    return sum(it.price * it.quantity for it in store.cart)


def test_out_of_stock_never_mutates(cart, durable, notifier) -> None:
    assert cart.add_to_cart(_product(stock=0)) is False
    assert cart.cart == []
    assert durable.get_item("cart") is None
    assert [(n.level, n.text) for n in notifier.history] == [(WARNING, "商品库存不足")]


def test_add_appends_and_persists(cart, durable, notifier) -> None:
    cart.add_to_cart(_product(pid=1, image="a.png"), 2)
    cart.add_to_cart(_product(pid=2, price=3.5))

    assert [(it.id, it.quantity) for it in cart.cart] == [(1, 2), (2, 1)]
    stored = json.loads(durable.get_item("cart"))
    assert stored[0] == {"id": 1, "name": "p1", "price": 10.0, "stock": 5, "image": "a.png", "quantity": 2}
    assert [n.level for n in notifier.history] == [SUCCESS, SUCCESS]


def test_adding_up_to_exact_stock_succeeds(cart) -> None:
    p = _product(stock=5)
    assert cart.add_to_cart(p, 2)
    assert cart.add_to_cart(p, 3)
    assert cart.find(1).quantity == 5
    assert len(cart.cart) == 1


def test_adding_past_stock_is_refused(cart, notifier) -> None:
    p = _product(stock=5)
    cart.add_to_cart(p, 2)
    assert cart.add_to_cart(p, 4) is False
    assert cart.find(1).quantity == 2
    assert notifier.history[-1].text == "已达到最大库存数量"


def test_add_rejects_non_positive_quantity(cart) -> None:
    with pytest.raises(ValueError):
        cart.add_to_cart(_product(), 0)


def test_remove(cart, notifier) -> None:
    cart.add_to_cart(_product(pid=1))
    cart.add_to_cart(_product(pid=2))
    notifier.drain()

    assert cart.remove_from_cart(1) is True
    assert [it.id for it in cart.cart] == [2]
    assert notifier.drain()[0].text == "已从购物车移除"

    assert cart.remove_from_cart(99) is False
    assert notifier.drain() == []


def test_update_quantity_soft_bounds(cart, notifier) -> None:
    p = _product(stock=3)
    cart.add_to_cart(p)
    item = cart.find(1)
    notifier.drain()

    assert cart.update_quantity(item, -1) is False
    assert cart.update_quantity(item, 2) is True
    assert cart.update_quantity(item, 1) is False
    assert item.quantity == 3
    assert cart.update_quantity(_product(pid=42), 1) is False
    assert notifier.drain() == []


def test_update_quantity_persists(cart, durable) -> None:
    cart.add_to_cart(_product(stock=4))
    cart.update_quantity(cart.find(1), 2)
    assert json.loads(durable.get_item("cart"))[0]["quantity"] == 3


@pytest.mark.parametrize("seed", range(10))
def test_total_tracks_line_items(cart, seed) -> None:
    rnd = random.Random(seed)
    products = [_product(pid=i, price=round(rnd.uniform(0.5, 99), 2), stock=rnd.randint(0, 6)) for i in range(5)]

    for _ in range(60):
        op = rnd.choice(["add", "remove", "update"])
        p = rnd.choice(products)
        if op == "add":
            cart.add_to_cart(p, rnd.randint(1, 3))
        elif op == "remove":
            cart.remove_from_cart(p.id)
        else:
            cart.update_quantity(p, rnd.choice([-2, -1, 1, 2]))

        assert cart.total_amount == _recomputed(cart)
        assert len({it.id for it in cart.cart}) == len(cart.cart)
        for it in cart.cart:
            assert 0 < it.quantity <= it.stock


def test_clear_cart(cart, durable) -> None:
    cart.add_to_cart(_product())
    cart.toggle_cart()

    cart.clear_cart()

    assert cart.cart == []
    assert cart.show_cart is False
    assert cart.total_amount == 0
    assert durable.get_item("cart") is None
    assert durable.get_item("cartVisible") == "false"


def test_visibility_is_persisted(cart, durable) -> None:
    cart.toggle_cart()
    assert cart.show_cart is True
    assert durable.get_item("cartVisible") == "true"
    cart.toggle_cart()
    assert durable.get_item("cartVisible") == "false"
    cart.toggle_cart()
    cart.close_cart()
    assert cart.show_cart is False
    assert durable.get_item("cartVisible") == "false"


def test_rehydrates_from_storage(durable, notifier) -> None:
    first = CartStore(durable, notifier)
    first.add_to_cart(_product(pid=1, price=2.5), 2)
    first.toggle_cart()

    second = CartStore(durable, notifier)
    assert second.cart == [CartItem(id=1, name="p1", price=2.5, stock=5, extra={}, quantity=2)]
    assert second.total_amount == 5.0
    assert second.show_cart is False


@pytest.mark.parametrize(
    "raw",
    [
        "{oops",
        '{"id": 1}',
        '[{"name": "no id"}]',
        '[{"id": 1, "name": "a", "price": 2, "stock": 3, "quantity": -4}]',
        '[{"id": 1, "name": "a", "price": 2, "stock": 3, "quantity": 0}]',
    ],
)
def test_corrupt_cart_is_discarded(durable, notifier, raw) -> None:
    durable.set_item("cart", raw)
    store = CartStore(durable, notifier)
    assert store.cart == []
    assert durable.get_item("cart") is None
