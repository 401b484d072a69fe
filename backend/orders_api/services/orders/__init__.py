"""Order persistence services."""
