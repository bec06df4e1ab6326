"""Test package for relaxavl; puts the repository root on the import path."""

import sys
from pathlib import Path

# cli/ and benchmarks/ are imported directly from the checkout.
_ROOT = str(Path(__file__).resolve().parents[1])
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)
