"""Cleaning log domain - Checklist submissions and manager review"""

from .router import router

__all__ = ["router"]
