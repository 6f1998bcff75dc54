"""Business domain - Accounts, login and business-wide alert recipients"""

from .router import router

__all__ = ["router"]
