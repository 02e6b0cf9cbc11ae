"""
Consistency checks for parameter headers.

The rules below are evaluated in a fixed order and stop at the first failure,
so the reported violation is deterministic when several rules are broken.

1. The header has a parameter id.
2. The header has a non-empty display name.
3. A correction has a central value, and no variations or responses.
4. A non-correction has at least one variation.
5. A splineable parameter is neither randomly thrown nor responseless.
6. A responseless parameter has no header-level responses and names the
   parameter carrying its response.
7. An event-by-event parameter has no header-level responses. Any other
   parameter has header-level responses, one per variation unless it is a
   correction.

Rule 3 is checked before rule 7, so a correction that does not vary per event
can never validate: with responses it fails rule 3, without them rule 7.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from systparam.constants import HeaderRule
from systparam.context.header import ParameterHeader

logger = logging.getLogger(__name__)


class HeaderViolation(BaseModel):
    """
    The first consistency rule a parameter header breaks.

    Attributes
    ----------
    rule : HeaderRule
        Identifier of the violated rule.
    parameter_id : int | None
        Id of the offending header.
    display_name : str
        Name of the offending header.
    details : dict[str, Any]
        Values of the fields involved in the violation.
    """

    rule: HeaderRule = Field(..., description="Identifier of the violated rule.")
    parameter_id: int | None = Field(default=None, description="Offending header id.")
    display_name: str = Field(default="", description="Offending header name.")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Values of the fields involved."
    )

    @property
    def message(self) -> str:
        label = f"ParameterHeader({self.parameter_id}:{self.display_name!r})"
        d = self.details
        match self.rule:
            case HeaderRule.MISSING_IDENTITY:
                return f"{label} has no parameter_id."
            case HeaderRule.MISSING_NAME:
                return f"{label} has an empty display_name."
            case HeaderRule.CORRECTION_MISSING_CENTRAL_VALUE:
                return f"{label} is marked as a correction but has no central_value."
            case HeaderRule.CORRECTION_WITH_VARIATIONS_OR_RESPONSES:
                return (
                    f"{label} is marked as a correction but has variations "
                    f"({d['n_variations']}) or responses ({d['n_responses']})."
                )
            case HeaderRule.NON_CORRECTION_MISSING_VARIATIONS:
                return f"{label} is not a correction but contains no variations."
            case HeaderRule.SPLINEABLE_ALSO_RANDOM:
                return f"{label} is marked as splineable and as randomly thrown."
            case HeaderRule.SPLINEABLE_ALSO_RESPONSELESS:
                return (
                    f"{label} is marked as splineable but expresses its response "
                    f"through parameter {d['response_parameter_id']}."
                )
            case HeaderRule.RESPONSELESS_HAS_HEADER_RESPONSES:
                return (
                    f"{label} is marked as responseless but has "
                    f"{d['n_responses']} header-level responses."
                )
            case HeaderRule.RESPONSELESS_MISSING_TARGET_ID:
                return (
                    f"{label} is marked as responseless but has no "
                    f"response_parameter_id."
                )
            case HeaderRule.EVENT_BY_EVENT_HAS_HEADER_RESPONSES:
                return (
                    f"{label} varies per event but has {d['n_responses']} "
                    f"header-level responses."
                )
            case HeaderRule.AGGREGATE_MISSING_HEADER_RESPONSES:
                return (
                    f"{label} does not vary per event but has no header-level "
                    f"responses."
                )
            case HeaderRule.AGGREGATE_RESPONSE_VARIATION_COUNT_MISMATCH:
                return (
                    f"{label} does not vary per event but has {d['n_responses']} "
                    f"header-level responses for {d['n_variations']} variations."
                )


def find_violation(header: ParameterHeader) -> HeaderViolation | None:
    """
    Find the first consistency rule a parameter header breaks.

    Parameters
    ----------
    header : ParameterHeader
        The header to check. It is not modified.

    Returns
    -------
    HeaderViolation | None
        The first violated rule, or None if the header is consistent.
    """

    def violation(rule: HeaderRule, **details: Any) -> HeaderViolation:
        return HeaderViolation(
            rule=rule,
            parameter_id=header.parameter_id,
            display_name=header.display_name,
            details=details,
        )

    n_variations = len(header.variations)
    n_responses = len(header.responses)

    if header.parameter_id is None:
        return violation(HeaderRule.MISSING_IDENTITY)
    if not header.display_name:
        return violation(HeaderRule.MISSING_NAME)

    if header.is_correction:
        if header.central_value is None:
            return violation(HeaderRule.CORRECTION_MISSING_CENTRAL_VALUE)
        if n_variations or n_responses:
            return violation(
                HeaderRule.CORRECTION_WITH_VARIATIONS_OR_RESPONSES,
                n_variations=n_variations,
                n_responses=n_responses,
            )
    elif not n_variations:
        return violation(HeaderRule.NON_CORRECTION_MISSING_VARIATIONS)

    if header.is_splineable:
        if header.is_randomly_thrown:
            return violation(HeaderRule.SPLINEABLE_ALSO_RANDOM)
        if header.is_responseless:
            return violation(
                HeaderRule.SPLINEABLE_ALSO_RESPONSELESS,
                response_parameter_id=header.response_parameter_id,
            )

    if header.is_responseless:
        if n_responses:
            return violation(
                HeaderRule.RESPONSELESS_HAS_HEADER_RESPONSES, n_responses=n_responses
            )
        if header.response_parameter_id is None:
            return violation(HeaderRule.RESPONSELESS_MISSING_TARGET_ID)

    if header.varies_per_event:
        if n_responses:
            return violation(
                HeaderRule.EVENT_BY_EVENT_HAS_HEADER_RESPONSES, n_responses=n_responses
            )
    else:
        if not n_responses:
            return violation(HeaderRule.AGGREGATE_MISSING_HEADER_RESPONSES)
        if not header.is_correction and n_responses != n_variations:
            return violation(
                HeaderRule.AGGREGATE_RESPONSE_VARIATION_COUNT_MISMATCH,
                n_variations=n_variations,
                n_responses=n_responses,
            )

    return None


def validate(header: ParameterHeader, verbose: bool = True) -> bool:
    """
    Check that a parameter header is internally consistent.

    Parameters
    ----------
    header : ParameterHeader
        The header to check. It is not modified.
    verbose : bool, default=True
        Log the violated rule at ERROR level when the check fails.

    Returns
    -------
    bool
        True if the header passes every rule.
    """
    found = find_violation(header)
    if found is None:
        return True
    if verbose:
        logger.error(f"[{found.rule}] {found.message}")
    return False
