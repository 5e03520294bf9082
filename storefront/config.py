from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../storefront repo
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    admin_id: int
    api_base_url: str
    request_timeout: float  # seconds
    storage_path: str
    brand_title: str
    currency: str
    decimals: int


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    admin_id=_get_int("ADMIN_ID", "ADMIN_TG_ID", "ADMIN_TG", default=0) or 0,
    api_base_url=_get_env("API_BASE_URL", "BASE_URL", default="http://mall.yellow-fish.cn/api")
    or "http://mall.yellow-fish.cn/api",
    request_timeout=_get_float("REQUEST_TIMEOUT", default=5.0) or 5.0,
    storage_path=_get_path("STORAGE_PATH", "DB_PATH", default=str(ROOT_DIR / "data" / "storage.db")),
    brand_title=_get_env("BRAND_TITLE", default="云上商城") or "云上商城",
    currency=_get_env("CURRENCY", default="CNY") or "CNY",
    decimals=_get_int("DECIMALS", default=2) or 2,
)


def require_bot_settings(s: Settings = settings) -> None:
    if not s.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
    if not s.admin_id:
        raise RuntimeError("ADMIN_ID is empty. Set ADMIN_ID (or ADMIN_TG_ID) in .env")
