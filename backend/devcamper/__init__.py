"""
DevCamper Backend — Application Package Initializer
===================================================

What: Marks the `devcamper` directory as a Python package.
Who:  Used by uvicorn (`devcamper.main:app`), the seeder CLI and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Middleware (logging, errors, id)  │  ← Cross-cutting concerns
    ├─────────────────────────────────────┤
    │   Services (geocoder) & Schemas     │  ← External lookups, API contracts
    ├─────────────────────────────────────┤
    │        Database (MongoDB client)    │  ← One connector per process
    └─────────────────────────────────────┘

    The seeder (devcamper.seeder) sits beside this stack, not on top of it:
    it shares config and database but never goes through HTTP.
"""

__version__ = "1.0.0"
