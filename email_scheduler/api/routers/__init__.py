"""
API Routers package.
"""

from . import emails

__all__ = ["emails"]
