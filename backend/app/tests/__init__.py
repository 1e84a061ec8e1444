"""Test package; puts ``backend/app`` on the path so ``src``, ``configs``, ``startup`` and ``app`` import."""

import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent.parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))
