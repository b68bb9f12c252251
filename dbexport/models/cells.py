"""
Cell Models (Pydantic)
======================

The closed value model shared by every encoder.
A cell is exactly one of: null, text, integer, real, boolean, binary.
"""

from enum import Enum
from typing import Literal, Union, Annotated
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# CONSTANTS
# =============================================================================

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class CellKind(str, Enum):
    """Discriminator values for the cell union."""
    NULL = "null"
    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"
    BINARY = "binary"


# =============================================================================
# CELL VARIANTS
# =============================================================================

class NullCell(BaseModel):
    """SQL NULL / missing value."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["null"] = "null"


class TextCell(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["text"] = "text"
    value: str


class IntegerCell(BaseModel):
    """Signed 64-bit integer."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["integer"] = "integer"
    value: int = Field(..., ge=INT64_MIN, le=INT64_MAX)


class RealCell(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["real"] = "real"
    value: float


class BooleanCell(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["boolean"] = "boolean"
    value: bool


class BinaryCell(BaseModel):
    """Raw byte sequence (BLOB)."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["binary"] = "binary"
    value: bytes


# Union type for cells
Cell = Annotated[
    Union[NullCell, TextCell, IntegerCell, RealCell, BooleanCell, BinaryCell],
    Field(discriminator="kind")
]

NULL = NullCell()
