from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from storefront.constants import (
    DEFAULT_ROLE,
    LOGIN_PATH,
    LOGIN_SUCCESS,
    MSG_LOGIN_FAILED,
    MSG_LOGIN_FAILED_PREFIX,
    MSG_LOGIN_SUCCESS,
    MSG_UNKNOWN_ERROR,
    REMEMBER_ME_KEY,
    USER_KEY,
)
from storefront.db.storage import KeyValueStorage
from storefront.services.notify import Notifier
from storefront.services.request import Request, RequestError

logger = logging.getLogger(__name__)

User = Dict[str, Any]


def load_persisted_user(storage: KeyValueStorage) -> Optional[User]:
    """Read the durable user record; anything unparseable counts as absent."""
    raw = storage.get_item(USER_KEY)
    if not raw:
        return None
    try:
        user = json.loads(raw)
    except ValueError:
        return None
    return user if isinstance(user, dict) else None


def _unwrap(user_data: User) -> User:
    # some backend responses nest the profile under "customer"
    customer = user_data.get("customer")
    return dict(customer) if isinstance(customer, dict) else dict(user_data)


class UserStore:
    def __init__(self, durable: KeyValueStorage, tab: KeyValueStorage, request: Request, notifier: Notifier) -> None:
        self.durable = durable
        self.tab = tab
        self.request = request
        self.notifier = notifier
        self.user: Optional[User] = None
        self.remember_me = False
        self.initialize()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def initialize(self) -> None:
        saved_user = self.durable.get_item(USER_KEY)
        saved_remember = self.durable.get_item(REMEMBER_ME_KEY)
        if not saved_user or saved_remember != "true":
            return
        try:
            user = json.loads(saved_user)
            if not isinstance(user, dict):
                raise ValueError(f"user must be an object, got {type(user).__name__}")
        except ValueError as e:
            logger.error("Failed to parse saved user: %s", e)
            self.durable.remove_item(USER_KEY)
            return
        self.user = user
        self.remember_me = True

    def set_user(self, user_data: User, remember: bool = False) -> None:
        self.user = _unwrap(user_data)
        self.remember_me = remember

        payload = json.dumps(self.user, ensure_ascii=False)
        if remember:
            self.durable.set_item(USER_KEY, payload)
            self.durable.set_item(REMEMBER_ME_KEY, "true")
        else:
            self.tab.set_item(USER_KEY, payload)
            self.durable.remove_item(USER_KEY)
            self.durable.remove_item(REMEMBER_ME_KEY)

    async def login(self, phone: str, password: str, remember: bool = False) -> bool:
        try:
            logger.info("Sending login request for %s", phone)
            response = await self.request.post(LOGIN_PATH, {"phone": phone, "password": password})
            logger.info("Login response: %r", response)

            if isinstance(response, dict) and response.get("message") == LOGIN_SUCCESS:
                user_data = _unwrap(response.get("data") or {})
                user_data.setdefault("role", DEFAULT_ROLE)
                self.set_user(user_data, remember)
                self.notifier.success(MSG_LOGIN_SUCCESS)
                return True

            message = response.get("message") if isinstance(response, dict) else None
            self.notifier.error(message or MSG_LOGIN_FAILED)
            return False
        except Exception as e:
            logger.exception("Login error")
            server_message = e.server_message if isinstance(e, RequestError) else None
            self.notifier.error(MSG_LOGIN_FAILED_PREFIX + (server_message or MSG_UNKNOWN_ERROR))
            return False

    def logout(self) -> None:
        self.user = None
        self.remember_me = False
        self.durable.remove_item(USER_KEY)
        self.durable.remove_item(REMEMBER_ME_KEY)
        self.tab.remove_item(USER_KEY)
