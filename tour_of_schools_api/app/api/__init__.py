"""
API package containing the REST routes.

The package exposes a top‑level ``router`` (see ``router.py``) which
includes the resource‑specific routers from ``endpoints``.
"""
