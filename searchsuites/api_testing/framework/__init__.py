"""
================================================================================
API Testing Framework
================================================================================

JSON API smoke-test components.

Modules:
    - http_client: One-call JSON client with Allure logging

Author: Automation Team
License: MIT
================================================================================
"""

from .http_client import ApiClient, ApiClientError, TransportError, get_json

__all__ = [
    "ApiClient",
    "ApiClientError",
    "TransportError",
    "get_json",
]
