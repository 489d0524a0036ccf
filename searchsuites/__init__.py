"""
Search UI automation suites.

Sub-packages:
  - common: configuration and logging shared by every suite
  - ui_testing: Playwright framework, page objects and end-to-end tests
  - api_testing: JSON API client and smoke tests
  - unit: offline tests of the framework itself
"""

__version__ = "1.0.0"
