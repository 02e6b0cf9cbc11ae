import logging
from typing import TextIO

from systparam import constants
from systparam.api import HeaderBuilder, ParameterCatalogue
from systparam.constants import HeaderRule, ParameterKind, VariationSampling
from systparam.context import (
    AggregateShape,
    CorrectionShape,
    EventByEventShape,
    ParameterDefinition,
    ParameterHeader,
    ParameterShape,
    ResponselessShape,
)
from systparam.exceptions import InvalidParameterHeaderError
from systparam.validation import HeaderViolation, find_violation, validate

logging.getLogger(__name__).addHandler(logging.NullHandler())


def add_stderr_logger(level: int = logging.INFO) -> logging.StreamHandler[TextIO]:
    logger = logging.getLogger(__name__)
    handler: logging.StreamHandler[TextIO] = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


__all__ = [
    "AggregateShape",
    "constants",
    "CorrectionShape",
    "EventByEventShape",
    "find_violation",
    "HeaderBuilder",
    "HeaderRule",
    "HeaderViolation",
    "InvalidParameterHeaderError",
    "ParameterCatalogue",
    "ParameterDefinition",
    "ParameterHeader",
    "ParameterKind",
    "ParameterShape",
    "ResponselessShape",
    "validate",
    "VariationSampling",
]
