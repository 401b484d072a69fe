"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- orders: Order parsing, validation and persistence
- external: Third-party API integrations (GitHub contents API)
"""
