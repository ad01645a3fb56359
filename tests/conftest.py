"""Shared test setup."""

import os
import tempfile
from pathlib import Path

# Keep test runs out of the real data directory
_tmp = Path(tempfile.mkdtemp(prefix="leadscore-test-"))
os.environ.setdefault("DATA_DIR", str(_tmp))
os.environ.setdefault("DB_PATH", str(_tmp / "leadscore.db"))
