"""Run the relay with uvicorn."""

import uvicorn

from chatty.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "chatty.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
