from typing import Any


def require_positive_number(v: float, name: str = "value") -> None:
    if v <= 0:
        raise ValueError(f"{name} must be > 0")


def parse_quantity(text: str) -> int:
    qty = int(text.strip())
    require_positive_number(qty, "quantity")
    return qty


def parse_product_id(text: str) -> Any:
    # backend ids are numeric; keep anything else as a string key
    t = text.strip()
    if not t:
        raise ValueError("product id is empty")
    return int(t) if t.isdigit() else t
