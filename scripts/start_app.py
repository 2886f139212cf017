#!/usr/bin/env python3
"""Start the comment API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from commentary.config import Settings
from commentary.util.logging import setup_logging
from commentary.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting comment API",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )

        # The app is built per process by its factory
        uvicorn.run(
            "commentary.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
