# diy_projects type definitions
# Rev 0.1.0

from __future__ import annotations
from enum import Enum
from typing import Literal

# Supported connectivity drivers
DriverName = Literal["sqlite", "mysql"]


class ParamKind(Enum):
    """Statement parameter kinds understood by DaoBase.bind."""
    INTEGER = "integer"
    DECIMAL = "decimal"
    DOUBLE = "double"
    STRING = "string"
    OTHER = "other"      # time of day, passed to the driver untouched
