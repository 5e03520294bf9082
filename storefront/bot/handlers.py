import shlex

from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove
from aiogram.utils.text_decorations import html_decoration

hquote = html_decoration.quote

from storefront.bot.keyboards import REMEMBER_YES, main_kb, remember_kb
from storefront.bot.states import LoginForm
from storefront.config import settings
from storefront.context import Storefront
from storefront.services.catalog import fetch_product
from storefront.services.request import RequestError
from storefront.utils.formatters import money
from storefront.utils.validators import parse_product_id, parse_quantity

router = Router()

REMEMBER_WORDS = {"remember", "r", "1", "yes", "y", "true"}


def _is_admin(message: Message) -> bool:
    try:
        return int(message.from_user.id) == int(settings.admin_id)
    except Exception:
        return False


def _args(message: Message) -> list[str]:
    try:
        return shlex.split(message.text or "")[1:]
    except ValueError:
        return (message.text or "").split()[1:]


async def _reply(message: Message, storefront: Storefront, text: str | None = None, **kwargs) -> None:
    lines = [hquote(str(n)) for n in storefront.notifier.drain()]
    if text:
        lines.append(text)
    if not lines:
        lines.append("👌")
    await message.answer("\n".join(lines), **kwargs)


async def _render(storefront: Storefront) -> str | None:
    try:
        return await storefront.render()
    except RequestError:
        return None


async def _show(message: Message, storefront: Storefront, path: str) -> None:
    try:
        text = await storefront.navigate(path)
    except RequestError:
        text = None
    loc = storefront.router.current
    header = f"📍 {hquote(storefront.document.location_hash)} · {hquote(storefront.document.title)}" if loc else None
    await _reply(message, storefront, "\n".join(t for t in (header, text) if t))


@router.message(Command("start"))
async def cmd_start(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await message.answer(f"✅ {hquote(settings.brand_title)}", reply_markup=main_kb())
    await _show(message, storefront, "/")


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer("❎ Cancelled.", reply_markup=ReplyKeyboardRemove())


@router.message(Command("help"))
async def cmd_help(message: Message):
    if not _is_admin(message):
        return

    text = (
        f"<b>{hquote(settings.brand_title)} — commands</b>\n\n"
        "<b>Navigation</b>\n"
        "/go PATH — open a page (/home, /products, /product/ID, /cart, ...)\n"
        "/back, /forward — history\n\n"
        "<b>Account</b>\n"
        "/login PHONE PASSWORD [remember] — sign in (no args: step by step)\n"
        "/logout — sign out\n"
        "/me — profile\n\n"
        "<b>Cart</b>\n"
        "/products — catalog\n"
        "/add ID [QTY] — add to cart\n"
        "/remove ID — remove line\n"
        "/inc ID, /dec ID — change quantity by one\n"
        "/cart — show cart\n"
        "/cart_toggle, /cart_close — panel visibility\n"
        "/cart_clear — empty the cart\n"
    )
    await message.answer(text)


@router.message(Command("ping"))
async def cmd_ping(message: Message):
    if not _is_admin(message):
        return
    await message.answer("pong ✅")


# ---------------- navigation ----------------

@router.message(Command("go"))
async def cmd_go(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    args = _args(message)
    if not args:
        await message.answer("Usage: /go PATH  (example: /go /products)")
        return
    await _show(message, storefront, args[0])


@router.message(Command("back"))
async def cmd_back(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    if await storefront.go(-1) is None:
        await _reply(message, storefront, "Nothing to go back to.")
        return
    await _reply(message, storefront, await _render(storefront))


@router.message(Command("forward"))
async def cmd_forward(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    if await storefront.go(1) is None:
        await _reply(message, storefront, "Nothing to go forward to.")
        return
    await _reply(message, storefront, await _render(storefront))


@router.message(Command("products"))
async def cmd_products(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await _show(message, storefront, "/products")


@router.message(Command("cart"))
async def cmd_cart(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await _show(message, storefront, "/cart")


@router.message(Command("me"))
async def cmd_me(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await _show(message, storefront, "/profile")


# ---------------- session ----------------

@router.message(Command("login"))
async def cmd_login(message: Message, state: FSMContext, storefront: Storefront):
    if not _is_admin(message):
        return

    args = _args(message)
    if len(args) >= 2:
        remember = len(args) >= 3 and args[2].lower() in REMEMBER_WORDS
        await storefront.user.login(args[0], args[1], remember)
        await _reply(message, storefront)
        return

    await state.clear()
    await state.set_state(LoginForm.waiting_phone)
    await message.answer("1/3) Phone number:\nCancel: /cancel", reply_markup=ReplyKeyboardRemove())


@router.message(LoginForm.waiting_phone)
async def login_phone(message: Message, state: FSMContext):
    if not _is_admin(message):
        return

    phone = (message.text or "").strip()
    if not phone or phone.startswith("/"):
        await message.answer("Send the phone number as text. Cancel: /cancel")
        return

    await state.update_data(phone=phone)
    await state.set_state(LoginForm.waiting_password)
    await message.answer("2/3) Password:\nCancel: /cancel")


@router.message(LoginForm.waiting_password)
async def login_password(message: Message, state: FSMContext):
    if not _is_admin(message):
        return

    password = message.text or ""
    if not password or password == "/cancel":
        await state.clear()
        await message.answer("❎ Cancelled.", reply_markup=ReplyKeyboardRemove())
        return

    await state.update_data(password=password)
    await state.set_state(LoginForm.waiting_remember)
    await message.answer("3/3) Remember me on this device?", reply_markup=remember_kb())


@router.message(LoginForm.waiting_remember)
async def login_remember(message: Message, state: FSMContext, storefront: Storefront):
    if not _is_admin(message):
        return

    data = await state.get_data()
    await state.clear()
    remember = (message.text or "").strip() == REMEMBER_YES
    await storefront.user.login(str(data.get("phone", "")), str(data.get("password", "")), remember)
    await _reply(message, storefront, reply_markup=main_kb())


@router.message(Command("logout"))
async def cmd_logout(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    storefront.user.logout()
    await _reply(message, storefront, "👋 Signed out.")


# ---------------- cart ----------------

@router.message(Command("add"))
async def cmd_add(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return

    args = _args(message)
    try:
        product_id = parse_product_id(args[0])
        qty = parse_quantity(args[1]) if len(args) >= 2 else 1
    except (IndexError, ValueError):
        await message.answer("Usage: /add ID [QTY]  (QTY must be positive)")
        return

    try:
        product = await fetch_product(storefront.request, product_id)
    except RequestError:
        await _reply(message, storefront)
        return

    if storefront.cart.add_to_cart(product, qty):
        await _reply(message, storefront, f"🛒 {storefront.cart.item_count} item(s), {money(storefront.cart.total_amount)}")
    else:
        await _reply(message, storefront)


@router.message(Command("remove"))
async def cmd_remove(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    try:
        product_id = parse_product_id(_args(message)[0])
    except (IndexError, ValueError):
        await message.answer("Usage: /remove ID")
        return
    if not storefront.cart.remove_from_cart(product_id):
        await _reply(message, storefront, f"#{hquote(str(product_id))} is not in the cart.")
        return
    await _reply(message, storefront)


async def _change_quantity(message: Message, storefront: Storefront, delta: int) -> None:
    try:
        product_id = parse_product_id(_args(message)[0])
    except (IndexError, ValueError):
        await message.answer("Usage: /inc ID or /dec ID")
        return
    item = storefront.cart.find(product_id)
    if item is None:
        await _reply(message, storefront, f"#{hquote(str(product_id))} is not in the cart.")
        return
    storefront.cart.update_quantity(item, delta)
    await _reply(message, storefront, f"#{hquote(str(item.id))} {hquote(item.name)} × {item.quantity}")


@router.message(Command("inc"))
async def cmd_inc(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await _change_quantity(message, storefront, 1)


@router.message(Command("dec"))
async def cmd_dec(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    await _change_quantity(message, storefront, -1)


@router.message(Command("cart_toggle"))
async def cmd_cart_toggle(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    storefront.cart.toggle_cart()
    await _reply(message, storefront, f"Cart panel: {'open' if storefront.cart.show_cart else 'closed'}")


@router.message(Command("cart_close"))
async def cmd_cart_close(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    storefront.cart.close_cart()
    await _reply(message, storefront, "Cart panel: closed")


@router.message(Command("cart_clear"))
async def cmd_cart_clear(message: Message, storefront: Storefront):
    if not _is_admin(message):
        return
    storefront.cart.clear_cart()
    await _reply(message, storefront, "🧹 Cart cleared.")
