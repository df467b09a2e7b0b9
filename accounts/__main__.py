"""Run the API server: ``python -m accounts``."""

import sys

import uvicorn
from pydantic import ValidationError

from accounts.core.config import load_settings
from accounts.core.logging import get_logger
from accounts.main import create_app

logger = get_logger(__name__)


def main() -> None:
    try:
        settings = load_settings()
    except ValidationError as e:
        invalid = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        # Logging is not configured yet; the root logger's last-resort handler writes to stderr
        logger.error(f"Invalid configuration: {invalid}")
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"Listening on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
