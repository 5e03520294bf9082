from aiogram.utils.text_decorations import html_decoration

hquote = html_decoration.quote

from storefront.config import settings
from storefront.stores.models import CartItem


def money(v: float) -> str:
    return f"{v:.{settings.decimals}f} {settings.currency}"


def cart_line(item: CartItem) -> str:
    return f"• #{hquote(str(item.id))} {hquote(item.name)} × {item.quantity} = {money(item.line_total)} (stock {item.stock})"
