"""
Application package.

Contains the main entrypoint for the API and its layers: ``core``
(configuration, logging, database, errors, security), ``stores``
(persistence), ``services`` (business logic), ``schemas`` (pydantic
payloads) and ``api`` (routers).
"""

from .main import app  # noqa: F401
