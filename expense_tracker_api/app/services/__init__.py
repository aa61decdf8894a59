"""
Service layer.

Each service encapsulates the business logic of one domain (auth,
ledger entries, contact messages, administration) on top of the
stores.  Services receive the ``Database`` handle in their
constructor; API handlers obtain them through the dependencies in
``api.deps``.
"""
