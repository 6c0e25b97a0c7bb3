"""
Pydantic models for forest fire records.

``ForestFireRecord`` is the wire shape of a record: the four
attributes and nothing else.  Request bodies are not parsed through
these models because create and update report missing or mistyped
fields with specific 400 messages; see ``services.validation``.
"""

from typing import List, Union

from pydantic import BaseModel, Field


class ForestFireRecord(BaseModel):
    """A forest fire statistic for one year and autonomous community."""

    year: int = Field(..., description="Calendar year", examples=[2024])
    autonomous_community: str = Field(
        ..., description="Autonomous community, lowercase", examples=["andalucia"]
    )
    number_of_accidents: Union[int, float] = Field(..., examples=[10034])
    percentage_of_large_fires: Union[int, float] = Field(
        ..., description="Fraction of large fires", examples=[0.39]
    )


class RecordMessage(BaseModel):
    """Confirmation returned by create and update."""

    message: str
    data: ForestFireRecord


class RecordListMessage(BaseModel):
    """Confirmation returned by the seed endpoints."""

    message: str
    data: List[ForestFireRecord]


class DeleteResult(BaseModel):
    message: str
    deleted: int
