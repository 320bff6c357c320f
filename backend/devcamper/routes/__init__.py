# Routes package init
"""
DevCamper Backend — API Routes Package
========================================

Route Inventory:
    - bootcamps.py:  /api/v1/bootcamps and /api/v1/bootcamps/{id} (CRUD)
    - health.py:     GET /health (service health check)

Routes stay thin: HTTP concerns only. Errors propagate to the error
normalizer registered in main.py.
"""
