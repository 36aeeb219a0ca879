import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BOROUGHS_DATA_DIR", "BOROUGHS_SAVE_URL", "BOROUGHS_SEED", "BOROUGHS_LOG_LEVEL", "BOROUGHS_INVENTORY_LIMIT"):
        monkeypatch.delenv(name, raising=False)
