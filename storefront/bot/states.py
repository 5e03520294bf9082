from aiogram.fsm.state import State, StatesGroup


class LoginForm(StatesGroup):
    waiting_phone = State()
    waiting_password = State()
    waiting_remember = State()
