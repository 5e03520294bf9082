from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

REMEMBER_YES = "✅ Remember me"
REMEMBER_NO = "Only this session"


def main_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="/help"), KeyboardButton(text="/products")],
            [KeyboardButton(text="/cart"), KeyboardButton(text="/me")],
            [KeyboardButton(text="/back"), KeyboardButton(text="/forward")],
        ],
        resize_keyboard=True,
    )


def remember_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=REMEMBER_YES), KeyboardButton(text=REMEMBER_NO)],
            [KeyboardButton(text="/cancel")],
        ],
        resize_keyboard=True,
        one_time_keyboard=True,
    )
