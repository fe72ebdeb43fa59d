"""
API route modules.
"""

from .admin import router as admin_router
from .articles import router as articles_router
from .misc import router as misc_router
from .series import router as series_router

__all__ = [
    "admin_router",
    "articles_router",
    "misc_router",
    "series_router",
]
