"""
Pytest configuration.

Puts the project root on the import path so the tests run from a checkout
without installing the package.
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))
