"""Run the API with ``python -m unified_search``."""

import uvicorn

from unified_search.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "unified_search.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
