"""
Application package initializer.

The package is organised in three layers:

* ``core``: configuration, logging, errors, the key-value store
  backends and the JSON codec;
* ``schemas``: pydantic models of the stored entities;
* ``services``: collection services and the workflows built on them.

``create_app`` in ``main`` wires them together.
"""

from .main import ReservationApp, create_app  # noqa: F401
