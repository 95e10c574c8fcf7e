# Models package init
"""
Standalone Builder - Backend Record Models
===========================================

What:  Pydantic representations of the rows and identities owned by Supabase.
Why:   The backend returns plain dicts (PostgREST) and SDK objects (auth);
       converting them once at the backend-service seam gives the services
       typed values to work with.

Records:
    - Page:          one row of the pages table
    - PageStatus:    draft | published
    - UserIdentity:  the subset of a Supabase auth user this system reads
"""

from standalone_builder.models.page import Page, PageStatus, PAGE_SUMMARY_COLUMNS
from standalone_builder.models.user import UserIdentity

__all__ = ["Page", "PageStatus", "PAGE_SUMMARY_COLUMNS", "UserIdentity"]
