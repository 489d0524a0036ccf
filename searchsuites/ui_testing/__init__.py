"""UI automation: framework, page objects and tests."""
