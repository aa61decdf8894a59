"""
Endpoint modules.

Each module defines an APIRouter for one domain (auth, ledger
entries, contact, admin).  The routers are aggregated in
``api.router`` and mounted under ``/api`` by the application.
"""
