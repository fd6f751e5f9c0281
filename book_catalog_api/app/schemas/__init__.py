"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored documents to decouple the API
and template representations from persistence.
"""
