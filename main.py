import logging

import uvicorn

from src.config import get_config


def main() -> None:
    config = get_config()
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("src.api:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
