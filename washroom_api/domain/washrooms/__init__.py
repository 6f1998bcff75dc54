"""Washroom domain - Locations, staff PINs and overdue alert settings"""

from .router import router

__all__ = ["router"]
