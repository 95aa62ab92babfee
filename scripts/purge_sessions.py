"""Delete expired and revoked login sessions. Safe to run from cron."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_system.workforce_system.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    removed = container.access_gate.purge_expired()
    print(f"OK: removed {removed} sessions")


if __name__ == "__main__":
    main()
