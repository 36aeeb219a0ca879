from pathlib import Path
import logging
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from boroughs.config import GameConfig
from boroughs.domain.errors import BoroughsError
from boroughs.presentation.cli import run


def main() -> None:
    load_dotenv()
    config = GameConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(config)
    except (KeyboardInterrupt, EOFError):
        print("\nSession ended.")
    except BoroughsError as exc:
        print("The game closed safely.")
        print(f"Reason: {exc}")
        print("Check BOROUGHS_SAVE_URL, or set it to an empty value to keep saves in memory.")


if __name__ == "__main__":
    main()
