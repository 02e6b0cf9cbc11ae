import logging
from typing import Self

from systparam.context.header import ParameterHeader
from systparam.exceptions import InvalidParameterHeaderError
from systparam.validation import find_violation


logger = logging.getLogger(__name__)


class HeaderBuilder:
    """
    A programmatic interface for building parameter headers.

    This class provides a fluent API for populating a ParameterHeader step by
    step. `build` validates the result and refuses to return an inconsistent
    header, so anything it returns can be handed straight to a consumer.

    Attributes
    ----------
    _header : ParameterHeader
        The header being populated.
    """

    def __init__(self, display_name: str, parameter_id: int):
        """
        Initialize the HeaderBuilder.

        Parameters
        ----------
        display_name : str
            Human-readable parameter name.
        parameter_id : int
            Identifier used to key per-event data products.
        """
        self._header = ParameterHeader(
            display_name=display_name, parameter_id=parameter_id
        )
        logger.info(
            f"Initialized HeaderBuilder: id={parameter_id}, name='{display_name}'"
        )

    def as_correction(self, central_value: float) -> Self:
        """
        Mark the parameter as a correction applied at `central_value`.

        Parameters
        ----------
        central_value : float
            The value the correction applies.

        Returns
        -------
        HeaderBuilder
            Self for method chaining.
        """
        self._header.is_correction = True
        self._header.central_value = central_value
        logger.info(f"Marked as correction: central_value={central_value}")
        return self

    def with_central_value(self, central_value: float) -> Self:
        self._header.central_value = central_value
        logger.debug(f"Set central_value={central_value}")
        return self

    def with_variations(
        self,
        variations: list[float],
        splineable: bool = False,
        randomly_thrown: bool = False,
    ) -> Self:
        """
        Set the parameter values at which responses were evaluated.

        Parameters
        ----------
        variations : list[float]
            Evaluated parameter values.
        splineable : bool, default=False
            Whether the values form a grid suitable for splining the response.
        randomly_thrown : bool, default=False
            Whether the values were thrown from a prior distribution.

        Returns
        -------
        HeaderBuilder
            Self for method chaining.
        """
        self._header.variations = list(variations)
        self._header.is_splineable = splineable
        self._header.is_randomly_thrown = randomly_thrown
        logger.info(
            (
                f"Added {len(variations)} variations: splineable={splineable}, "
                f"randomly_thrown={randomly_thrown}"
            )
        )
        return self

    def with_responses(self, responses: list[float]) -> Self:
        """
        Store header-level responses, marking the parameter as not varying per
        event.

        Parameters
        ----------
        responses : list[float]
            One response per variation.

        Returns
        -------
        HeaderBuilder
            Self for method chaining.
        """
        self._header.varies_per_event = False
        self._header.responses = list(responses)
        logger.info(f"Added {len(responses)} header-level responses")
        return self

    def per_event(self) -> Self:
        self._header.varies_per_event = True
        return self

    def responseless_via(self, response_parameter_id: int) -> Self:
        """
        Record this parameter's response under another parameter.

        Parameters
        ----------
        response_parameter_id : int
            The parameter holding the combined response.

        Returns
        -------
        HeaderBuilder
            Self for method chaining.
        """
        self._header.is_responseless = True
        self._header.response_parameter_id = response_parameter_id
        logger.info(f"Response recorded under parameter {response_parameter_id}")
        return self

    def with_one_sigma_shifts(self, minus: float, plus: float) -> Self:
        self._header.one_sigma_shifts = (minus, plus)
        return self

    def with_validity_range(
        self, lower: float | None = None, upper: float | None = None
    ) -> Self:
        """
        Set inclusive bounds on the parameter values. None leaves a side
        unbounded.
        """
        self._header.validity_range = (lower, upper)
        return self

    def natural_units(self, natural: bool = True) -> Self:
        self._header.units_are_natural = natural
        return self

    def as_property_shift(self) -> Self:
        self._header.is_weight_variation = False
        return self

    def with_options(self, *options: str) -> Self:
        self._header.options.extend(options)
        return self

    def build(self) -> ParameterHeader:
        """
        Build and return the final ParameterHeader.

        Returns
        -------
        ParameterHeader
            An independent copy of the populated header.

        Raises
        ------
        InvalidParameterHeaderError
            If the populated header fails validation.
        """
        violation = find_violation(self._header)
        if violation is not None:
            logger.error(f"[{violation.rule}] {violation.message}")
            raise InvalidParameterHeaderError.from_violation(violation)

        logger.info(
            (
                f"ParameterHeader {self._header.parameter_id} "
                f"'{self._header.display_name}' successfully built."
            )
        )
        return self._header.model_copy(deep=True)
