"""
Run the server: ``python -m ristoword`` or the ``ristoword`` script.

Host and port come from settings (``HOST``/``PORT``, default port 3000).
"""

import uvicorn

from ristoword.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "ristoword.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
