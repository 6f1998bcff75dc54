"""Reported issue domain - Public issue reports from washroom visitors"""

from .router import router

__all__ = ["router"]
