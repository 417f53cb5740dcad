"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persisted ``UserRecord`` so that the API
representation (which never exposes password hashes) stays decoupled
from storage.
"""
