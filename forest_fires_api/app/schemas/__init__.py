"""
Pydantic schema definitions for API payloads.

Schemas are separated from the store so that the API representation
(which never carries the internal row id) is decoupled from
persistence.
"""
