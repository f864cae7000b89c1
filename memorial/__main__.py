"""Entry point: python -m memorial"""

import uvicorn

from memorial.config import settings


def main() -> None:
    uvicorn.run("memorial.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
