"""
Top-level API router.

Aggregates the domain routers under their prefixes.  The application
mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, contact
from .endpoints.ledger import expense_router, income_router


router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(income_router, prefix="/income", tags=["income"])
router.include_router(expense_router, prefix="/expense", tags=["expense"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
