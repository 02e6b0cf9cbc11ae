from .header import ParameterHeader
from .shapes import (
    AggregateShape,
    CorrectionShape,
    EventByEventShape,
    ParameterDefinition,
    ParameterShape,
    ResponselessShape,
)

__all__ = [
    "AggregateShape",
    "CorrectionShape",
    "EventByEventShape",
    "ParameterDefinition",
    "ParameterHeader",
    "ParameterShape",
    "ResponselessShape",
]
