"""
Top‑level package for the Tour of Schools mock backend.

This file makes ``tour_of_schools_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``tour_of_schools_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
