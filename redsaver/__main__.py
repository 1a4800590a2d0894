import logging
import sys

import uvicorn

from redsaver.core.config import ConfigError, Settings, validate_runtime_config
from redsaver.main import configure_logging, create_app

logger = logging.getLogger("redsaver")


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    try:
        validate_runtime_config(settings)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
