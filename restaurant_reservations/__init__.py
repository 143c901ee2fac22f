"""
Top‑level package for the Restaurant Reservations manager.

This file makes ``restaurant_reservations`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``restaurant_reservations.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
