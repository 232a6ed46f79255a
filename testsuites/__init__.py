"""
Test suites package.

Kept importable so that the framework can be used from:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - the demo API entry point (`python -m demo_api`)
"""
