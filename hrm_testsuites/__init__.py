"""
HRM login test suites.

This package keeps the suite importable to support:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - CI imports

Demo credentials in `config/config.yaml` are the public ones of the demo site.
"""

__version__ = "1.0.0"
