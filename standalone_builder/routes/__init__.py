# Routes package init
"""
Standalone Builder - API Routes Package
========================================

Route Inventory:
    - config.py:            GET    /api/config
    - pages.py:             POST   /api/pages/save
                            GET    /api/pages/list
                            GET    /api/pages/{id}
                            DELETE /api/pages/{id}
    - standalone_pages.py:  GET    /api/standalone-pages/get?id=
                            DELETE /api/standalone-pages/delete?id=
    - admin.py:             GET    /api/admin/stats
    - health.py:            GET    /health

Routes stay thin: they declare their dependencies (token, backend, user),
call one service method and wrap the result in its response envelope.
Errors are raised, never returned; main.py turns them into JSON.
"""
