"""
VitaCare storefront end-to-end suite.

This package is kept importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - CI/CD module imports

Selectors, URLs and credentials are demo data for a public staging storefront.
"""

__version__ = "1.0.0"
