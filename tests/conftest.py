"""Pytest configuration for slam tests."""

import sys
from pathlib import Path

# Add the repository root to Python path BEFORE test collection so the
# tests run without installing the package
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))


def pytest_configure(config):
    """Configure pytest before test collection."""
    if str(package_root) not in sys.path:
        sys.path.insert(0, str(package_root))
