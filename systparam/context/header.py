from pydantic import BaseModel, Field


class ParameterHeader(BaseModel):
    """
    Describes a single systematic parameter and how its responses were produced.

    The header is permissive at construction time: any combination of flags and
    sequences is accepted. Cross-field consistency is checked by
    `systparam.validation.validate` before the header is handed to consumers.
    A default-constructed header is "unset" and never validates.

    Attributes
    ----------
    display_name : str
        Human-readable parameter name. Must be non-empty to validate.
    parameter_id : int | None
        Identifier used to key per-event data products. None means unhandled.
        Only unique within one configuration; the same id may describe an
        unrelated parameter elsewhere.
    is_weight_variation : bool
        Whether the parameter modifies an event weight rather than a physical
        property. Property shifts always need custom handling downstream.
    units_are_natural : bool
        Whether `central_value`, `variations` and `validity_range` are in natural
        units rather than sigma-shift units.
    varies_per_event : bool
        Whether responses are stored event by event. When False the whole
        response is described by `responses`.
    central_value : float | None
        Nominal parameter value used in the evaluation. None means unset.
    is_correction : bool
        Whether consumers should expect a single, always-applied response
        derived from `central_value` instead of a family of variations.
    one_sigma_shifts : tuple[float | None, float | None]
        The -1 and +1 sigma shifts, always in natural units. Used to convert
        between natural and sigma-shift representations.
    validity_range : tuple[float | None, float | None]
        Inclusive lower and upper bounds on allowed parameter values. A None
        bound leaves that side unbounded.
    is_splineable : bool
        Whether `variations` were chosen so a consumer can spline the response.
        Non-splineable parameters have usually been run in multisim mode.
    is_randomly_thrown : bool
        Whether non-splineable variations were thrown from a prior distribution.
    variations : list[float]
        Parameter values at which responses were evaluated.
    is_responseless : bool
        Whether the response to this parameter is recorded under another
        parameter, e.g. for a response R(p1, p2) that does not factorise.
    response_parameter_id : int | None
        The id of the parameter holding the combined response. Only meaningful
        when `is_responseless`.
    responses : list[float]
        Header-level responses, one per variation, for parameters that do not
        vary per event. Empty for event-by-event parameters.
    options : list[str]
        Free-form configuration strings for the parameter provider.
    """

    display_name: str = Field(default="", description="Human-readable name.")
    parameter_id: int | None = Field(
        default=None, description="Parameter identifier (None means unhandled)."
    )
    is_weight_variation: bool = Field(
        default=True, description="Weight variation rather than property shift."
    )
    units_are_natural: bool = Field(
        default=False, description="Values are in natural rather than sigma units."
    )
    varies_per_event: bool = Field(
        default=True, description="Responses are stored event by event."
    )
    central_value: float | None = Field(
        default=None, description="Nominal parameter value (None means unset)."
    )
    is_correction: bool = Field(
        default=False, description="Single always-applied response."
    )
    one_sigma_shifts: tuple[float | None, float | None] = Field(
        default=(None, None), description="-1 and +1 sigma shifts, natural units."
    )
    validity_range: tuple[float | None, float | None] = Field(
        default=(None, None),
        description="Inclusive bounds on parameter values (None means unbounded).",
    )
    is_splineable: bool = Field(
        default=False, description="Variations support spline interpolation."
    )
    is_randomly_thrown: bool = Field(
        default=False, description="Variations were thrown from a prior."
    )
    variations: list[float] = Field(
        default_factory=list, description="Evaluated parameter values."
    )
    is_responseless: bool = Field(
        default=False, description="Response is recorded under another parameter."
    )
    response_parameter_id: int | None = Field(
        default=None,
        description="Id of the parameter carrying the combined response.",
    )
    responses: list[float] = Field(
        default_factory=list, description="Header-level responses."
    )
    options: list[str] = Field(
        default_factory=list, description="Provider-specific option strings."
    )

    @property
    def has_central_value(self) -> bool:
        return self.central_value is not None

    @property
    def is_unbounded_below(self) -> bool:
        return self.validity_range[0] is None

    @property
    def is_unbounded_above(self) -> bool:
        return self.validity_range[1] is None

    def in_validity_range(self, value: float) -> bool:
        """
        Check whether a parameter value lies inside the validity range.

        Parameters
        ----------
        value : float
            Parameter value, in the units given by `units_are_natural`.

        Returns
        -------
        bool
            True if the value is within the inclusive bounds. Unbounded sides
            accept any value.
        """
        lower, upper = self.validity_range
        if lower is not None and value < lower:
            return False
        if upper is not None and value > upper:
            return False
        return True
