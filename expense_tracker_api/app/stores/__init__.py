"""
Persistence layer.

Each store wraps one table (or, for ledger entries, one table per
kind) behind plain methods.  Stores receive the ``Database`` handle
explicitly so services and tests can choose which database they talk
to.
"""
