# Routes package init
"""
Notes API — API Routes Package
================================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /  (liveness), GET /health (database readiness)

Routes are THIN: they extract path/body data, call the service and set the
status code and headers. Business logic belongs in services.
"""
