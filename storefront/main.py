import asyncio
import logging
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from storefront.config import require_bot_settings, settings
from storefront.context import Storefront
from storefront.bot.handlers import router

async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    require_bot_settings()
    storefront = Storefront(settings)

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()
    dp["storefront"] = storefront
    dp.include_router(router)

    try:
        await dp.start_polling(bot)
    finally:
        await storefront.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
