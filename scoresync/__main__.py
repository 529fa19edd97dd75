"""Run the relay with uvicorn: ``python -m scoresync``."""
import uvicorn

from .config import Config


def main() -> None:
    uvicorn.run(
        "scoresync.app:app",
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
