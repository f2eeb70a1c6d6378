import logging
import sys

import uvicorn

from snaphub.config import Settings
from snaphub.main import configure_logging, create_app

logger = logging.getLogger("snaphub")


def main() -> None:
    settings = Settings()
    configure_logging(settings)

    missing = settings.missing_required()
    if missing:
        logger.critical("Startup failed: missing env var(s): %s", ", ".join(missing))
        sys.exit(1)

    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
