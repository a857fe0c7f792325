"""Entry point: ``python -m error_assistant``."""

import uvicorn

from error_assistant.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "error_assistant.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
