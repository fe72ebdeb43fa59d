"""
Blog CMS Backend

A FastAPI backend for a file-based blog: MDX articles and series,
scheduled publishing and a development-only admin API.
"""

__version__ = "1.0.0"
