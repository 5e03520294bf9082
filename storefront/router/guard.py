"""Authentication gate for route transitions, free of storage and UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from storefront.router.routes import LOGIN_ROUTE, RouteLocation


@dataclass(frozen=True)
class Allowed:
    pass


@dataclass(frozen=True)
class RedirectedTo:
    path: str


GuardDecision = Union[Allowed, RedirectedTo]


def guard(target: RouteLocation, session_present: bool, login_path: str = LOGIN_ROUTE) -> GuardDecision:
    if target.record.requires_auth and not session_present:
        return RedirectedTo(login_path)
    return Allowed()
