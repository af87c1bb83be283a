"""
Main entrypoint: Discord bot + signing web endpoint in one process.

Both run on one asyncio event loop (discord.py client and uvicorn server
gathered together) and share one AppContext, so a session minted by /bundle
is immediately visible to the signing page.

Env: BASE_URL, DISCORD_BOT_TOKEN, PORT (required); API_HOST, DATA_DIR,
STATUS_RPC_URL, PERFORMANCE_RPC_URL, PRICE_API_URL, LOG_LEVEL, LOG_FORMAT.
Missing required configuration exits with status 1 before anything starts.
"""

import asyncio
import os
import sys

# Configure structured JSON logging before other imports that may log
from backend_bundlebot.bundlebot_logging import configure_stdlib_logging, get_logger

logger = get_logger("main")


async def run(ctx) -> None:
    """Serve the web endpoint and run the Discord client until either stops."""
    import uvicorn

    from backend_bundlebot.api_server import create_app
    from backend_bundlebot.bot.client import BundleBotClient
    from backend_bundlebot.bot.dispatcher import CommandDispatcher

    settings = ctx.settings
    app = create_app(ctx)
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.api_host,
            port=settings.port,
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )
    )
    client = BundleBotClient(CommandDispatcher(ctx))

    logger.info("main_server_starting", host=settings.api_host, port=settings.port)
    async with client:
        await asyncio.gather(server.serve(), client.start(settings.discord_bot_token))


def main() -> None:
    from backend_bundlebot.config import get_settings
    from backend_bundlebot.context import AppContext
    from backend_bundlebot.core.exceptions import ConfigError

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error("main_config_error", message=str(e))
        sys.exit(1)

    configure_stdlib_logging()
    ctx = AppContext.from_settings(settings)
    try:
        asyncio.run(run(ctx))
    except KeyboardInterrupt:
        logger.info("main_keyboard_interrupt")
    finally:
        logger.info("main_stopped")


if __name__ == "__main__":
    main()
