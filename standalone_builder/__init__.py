"""
Standalone Builder - Application Package
=========================================

What: Serverless-style HTTP handlers plus a client helper library for the
      Standalone Builder page editor.
Who:  Imported by uvicorn (`standalone_builder.main:app`), pytest and the
      client helpers in `standalone_builder.client`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Dependencies (Auth / Config)    │  ← bearer token, identity, backend
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← scoping, slugs, timestamps
    ├─────────────────────────────────────┤
    │   Backend Service (Supabase SDK)    │  ← auth + table storage
    └─────────────────────────────────────┘

    The client package sits on the other side of the HTTP boundary and
    talks to the routes (PageServiceClient) and to Supabase auth directly
    (AuthClient).
"""

__version__ = "1.0.0"
