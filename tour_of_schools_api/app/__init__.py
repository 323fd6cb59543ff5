"""
Application package initializer.

This package contains the entrypoint of the mock REST backend that the
Tour of Schools client talks to.  There is a single resource,
``/api/schools``, whose router lives in ``api/endpoints`` and whose
in‑memory storage lives in ``services``.
"""

from .main import app  # noqa: F401
