"""Run the API with uvicorn on the configured host and port (PORT, default 5000)."""

import uvicorn

from pcbuilder.config import settings


def main() -> None:
    uvicorn.run(
        "pcbuilder.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
