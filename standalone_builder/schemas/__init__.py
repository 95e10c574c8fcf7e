# Schemas package init
"""
Standalone Builder - API Schemas
=================================

What:  Pydantic models defining the HTTP contract for every route.
Why:   Request bodies are validated at the boundary before any service code
       touches them, and FastAPI serializes responses through these models.

Modules:
    - common.py: error body, /api/config payload, health payload
    - page.py:   save request, page envelopes
    - admin.py:  /api/admin/stats payload
"""
