from __future__ import annotations

"""Run the relay under uvicorn: ``python -m app``.

Requires env OPENAI_API_KEY; PORT defaults to 8080.
"""

import sys

import uvicorn
from pydantic import ValidationError

from app.config.settings import get_settings


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
