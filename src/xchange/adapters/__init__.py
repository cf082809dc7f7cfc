# src/xchange/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (rate APIs)
- Notifications (logging, Telegram)
- Formatting (output)
"""

__all__ = []
