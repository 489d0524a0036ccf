"""JSON API smoke testing."""
