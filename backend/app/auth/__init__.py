# app/auth/__init__.py
"""
Authentication modules for the expense tracker.

This package contains:
- identity.py: Authenticated principal derived from a verified session token
"""
from app.auth.identity import Identity

__all__ = ["Identity"]
