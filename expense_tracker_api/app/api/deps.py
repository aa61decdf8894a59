"""
FastAPI dependencies that build services for a request.

Services are cheap objects around the process-wide ``Database`` handle
attached to ``app.state`` at startup, so a new one is created per
request.
"""

from fastapi import Depends, Request

from ..core.db import Database, get_db
from ..schemas.ledger import LedgerKind
from ..services.admin_service import AdminService
from ..services.auth_service import AuthService
from ..services.contact_service import ContactService
from ..services.ledger_service import LedgerService


def get_auth_service(request: Request, db: Database = Depends(get_db)) -> AuthService:
    return AuthService(db, admin_email=request.app.state.settings.admin_email)


def get_contact_service(db: Database = Depends(get_db)) -> ContactService:
    return ContactService(db)


def get_admin_service(db: Database = Depends(get_db)) -> AdminService:
    return AdminService(db)


def ledger_service_dependency(kind: LedgerKind):
    """Return a dependency that builds a ``LedgerService`` for ``kind``."""

    def _get_ledger_service(db: Database = Depends(get_db)) -> LedgerService:
        return LedgerService(db, kind)

    return _get_ledger_service
