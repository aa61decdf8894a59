"""
Shared pydantic base for API payloads.

Python attributes stay snake_case while the JSON representation uses
camelCase (``userId``, ``createdAt``, ``categoryBreakdown``), which
is what browser clients of this API expect.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation returned by delete operations."""

    message: str = Field(..., examples=["Expense removed successfully"])
