"""Expose the application factory at package level.

``from mediqueue import create_app`` (also the target of ``FLASK_APP``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
