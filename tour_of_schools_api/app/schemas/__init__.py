"""
Pydantic schema definitions for API payloads.

Schemas describe the JSON exchanged over ``/api/schools`` and are kept
apart from the in‑memory storage used by the service layer.
"""
