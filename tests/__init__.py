"""
Test suite for the pagezones project.

This module contains all unit tests for the pagezones package.
"""

import sys
from pathlib import Path

# Add the package source to the Python path
package_root = Path(__file__).parent.parent / "packages" / "pagezones_core"
sys.path.insert(0, str(package_root))
