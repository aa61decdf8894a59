"""
Pydantic schema definitions for API payloads.

Each domain (users, ledger entries, contact messages, admin) defines
its own models for request and response bodies.  Schemas are
separated from the stores to decouple the API representation from
persistence.
"""
