from config import load_settings
from infrastructure.db.connection import create_client_repository
from infrastructure.logging.log_config import setup_logging
from interfaces.telegram.handlers import create_telegram_bot


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    if not settings.telegram_token:
        raise RuntimeError("TELEGRAM_TOKEN environment variable is not set.")

    client_repo = create_client_repository(settings)
    try:
        bot = create_telegram_bot(settings.telegram_token, client_repo)
        bot.infinity_polling()
    finally:
        client_repo.close()


if __name__ == "__main__":
    main()
