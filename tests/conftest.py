import json
from typing import Callable

import httpx
import pytest

from storefront.config import Settings
from storefront.db.storage import MemoryStorage
from storefront.services.notify import Notifier
from storefront.services.request import Request

BASE_URL = "http://shop.test/api"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        bot_token="",
        admin_id=0,
        api_base_url=BASE_URL,
        request_timeout=5.0,
        storage_path=str(tmp_path / "storage.db"),
        brand_title="云上商城",
        currency="CNY",
        decimals=2,
    )


@pytest.fixture
def durable() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def tab() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


def json_response(status: int, payload) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                          headers={"Content-Type": "application/json"})


@pytest.fixture
def make_request(notifier) -> Callable[[Callable[[httpx.Request], httpx.Response]], Request]:
    def _make(handler):
        return Request(BASE_URL, 5.0, notifier, transport=httpx.MockTransport(handler))

    return _make
