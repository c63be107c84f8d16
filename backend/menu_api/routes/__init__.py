"""
Menu API — API Routes Package
===============================

Route Inventory:
    - dishes.py:  GET  /api/dishes          (list all dishes)
                  GET  /api/dishes/{id}     (one dish by UUID or sequential ID)
                  POST /api/dishes          (create one or many)
    - admin.py:   POST /api/admin-login     (mock admin login)
    - health.py:  GET  /health              (service health check)

Routes stay thin: they extract request data, call a service and return
its result. Business rules live in services.
"""
