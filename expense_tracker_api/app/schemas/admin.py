"""Pydantic schemas for the administrator dashboard."""

from .base import CamelModel


class AdminStats(CamelModel):
    total_users: int
    total_incomes: int
    total_expenses: int
    pending_contacts: int
    total_income_amount: float
    total_expense_amount: float
