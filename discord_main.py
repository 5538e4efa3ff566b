from config import load_settings
from infrastructure.db.connection import create_client_repository
from infrastructure.logging.log_config import setup_logging
from interfaces.discord.handlers import create_discord_bot


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    if not settings.discord_token:
        raise RuntimeError("DISCORD_TOKEN environment variable is not set.")

    client_repo = create_client_repository(settings)
    try:
        bot = create_discord_bot(client_repo)
        bot.run(settings.discord_token, log_handler=None)
    finally:
        client_repo.close()


if __name__ == "__main__":
    main()
