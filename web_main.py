import uvicorn

from config import load_settings
from infrastructure.db.connection import create_client_repository
from infrastructure.logging.log_config import setup_logging
from interfaces.web.app import create_app


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    client_repo = create_client_repository(settings)
    try:
        app = create_app(client_repo)
        uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_config=None)
    finally:
        client_repo.close()


if __name__ == "__main__":
    main()
