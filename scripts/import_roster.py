"""Import a roster CSV (nis,nama,kelas[,status]) from the command line.

Usage: python scripts/import_roster.py data/students.csv
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

from dotenv import load_dotenv

from tardiness_tracker.config import get_settings_module
from tardiness_tracker.container import build_container
from tardiness_tracker.core.engine_config import EngineConfig
from tardiness_tracker.core.exceptions import ValidationError


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, config=EngineConfig.from_settings(settings))

    text = Path(argv[1]).read_text(encoding="utf-8-sig")
    try:
        result = container.importer.import_text(text)
    except ValidationError as exc:
        print(f"Invalid roster: {exc}")
        return 1

    if not result.ok:
        print(f"Import failed at batch {result.failed_batch}: {result.error} ({result.succeeded} rows committed before it)")
        return 1

    print(f"Import done. {result.succeeded} rows processed (insert/update).")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
