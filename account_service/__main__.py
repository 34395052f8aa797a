"""Run the account service with uvicorn: ``python -m account_service``."""

import uvicorn

from account_service.core.config import settings


def main() -> None:
    uvicorn.run(
        "account_service.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
