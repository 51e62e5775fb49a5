"""Run the API with uvicorn: ``python -m board_api``."""

import uvicorn

from board_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("board_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
