"""
SupportFlow API Routes

All API route modules.
"""

from supportflow.api.routes import admin, health, tickets

__all__ = [
    "tickets",
    "admin",
    "health",
]
