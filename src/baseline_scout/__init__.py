"""Baseline Scout: web-platform feature compatibility scanning for source trees."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
