"""Classroom attendance tracker.

Organized by feature modules (students, attendance, auth) with a thin Flask
controller layer over service/repository layers.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
