# Services package init
"""
Standalone Builder - Services Layer
====================================

What:  Business logic between the routes (HTTP) and Supabase (persistence).
How:   Routes resolve the caller and the backend through dependencies and
       hand both to a service method; services never touch the request.

Service Inventory:
    - BackendService (abstract): contract for identity + table storage
    - SupabaseBackendService:    concrete implementation over supabase-py
    - PageService:               save / list / get / delete, owner-scoped
    - AdminService:              admin membership check + aggregate stats
"""
