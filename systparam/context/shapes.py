from typing import Annotated, Literal, Self

from pydantic import BaseModel, Field, field_validator, model_validator

from systparam.constants import ParameterKind, VariationSampling
from systparam.context.header import ParameterHeader
from systparam.exceptions import InvalidParameterHeaderError
from systparam.validation import find_violation


class CorrectionShape(BaseModel):
    """
    A parameter with a single, always-applied response.

    Attributes
    ----------
    central_value : float
        The value the correction applies.
    response_parameter_id : int | None
        When set, the correction's response is recorded under this parameter.
    """

    kind: Literal["correction"] = "correction"
    central_value: float = Field(..., description="Value the correction applies.")
    response_parameter_id: int | None = Field(
        default=None, description="Parameter carrying the response, if any."
    )


class EventByEventShape(BaseModel):
    """
    A family of variations whose responses are stored per event.

    Attributes
    ----------
    variations : list[float]
        Evaluated parameter values, at least one.
    sampling : VariationSampling
        How the variations were chosen.
    """

    kind: Literal["event_by_event"] = "event_by_event"
    variations: list[float] = Field(..., min_length=1)
    sampling: VariationSampling = Field(default=VariationSampling.MULTISIM)


class AggregateShape(BaseModel):
    """
    A family of variations with one header-level response per variation.

    Attributes
    ----------
    variations : list[float]
        Evaluated parameter values, at least one.
    responses : list[float]
        Response for each variation, same length as `variations`.
    sampling : VariationSampling
        How the variations were chosen.
    """

    kind: Literal["aggregate"] = "aggregate"
    variations: list[float] = Field(..., min_length=1)
    responses: list[float] = Field(..., min_length=1)
    sampling: VariationSampling = Field(default=VariationSampling.MULTISIM)

    @model_validator(mode="after")
    def validate_one_response_per_variation(self) -> Self:
        if len(self.responses) != len(self.variations):
            raise ValueError(
                (
                    f"Aggregate parameters need one response per variation, got "
                    f"{len(self.responses)} responses for "
                    f"{len(self.variations)} variations."
                )
            )
        return self


class ResponselessShape(BaseModel):
    """
    A family of variations whose response is recorded under another parameter.

    Attributes
    ----------
    variations : list[float]
        Evaluated parameter values, at least one.
    response_parameter_id : int
        The parameter holding the combined response.
    sampling : VariationSampling
        How the variations were chosen. Joint responses cannot be splined.
    """

    kind: Literal["responseless"] = "responseless"
    variations: list[float] = Field(..., min_length=1)
    response_parameter_id: int = Field(
        ..., description="Parameter carrying the combined response."
    )
    sampling: VariationSampling = Field(default=VariationSampling.MULTISIM)

    @field_validator("sampling")
    @classmethod
    def validate_not_splined(cls, value: VariationSampling) -> VariationSampling:
        if value == VariationSampling.SPLINE:
            raise ValueError("Responseless parameters cannot be splined.")
        return value


ParameterShape = Annotated[
    CorrectionShape | EventByEventShape | AggregateShape | ResponselessShape,
    Field(discriminator="kind"),
]


class ParameterDefinition(BaseModel):
    """
    A systematic parameter whose structure is consistent by construction.

    Where a `ParameterHeader` accepts any flag combination and relies on
    validation, a definition only admits the shapes a consumer can interpret.
    It converts losslessly to a header that always validates. Headers convert
    back through `from_header`, which normalises fields the shape has no room
    for (see `from_header`).

    Attributes
    ----------
    display_name : str
        Human-readable parameter name.
    parameter_id : int
        Identifier used to key per-event data products.
    shape : ParameterShape
        The structural kind of the parameter and its kind-specific fields.
    is_weight_variation : bool
        Whether the parameter modifies an event weight.
    units_are_natural : bool
        Whether values are in natural units.
    central_value : float | None
        Nominal value for non-correction shapes. Corrections keep theirs on the
        shape.
    one_sigma_shifts : tuple[float | None, float | None]
        The -1 and +1 sigma shifts, natural units.
    validity_range : tuple[float | None, float | None]
        Inclusive bounds, None for an unbounded side.
    options : list[str]
        Provider-specific option strings.
    """

    display_name: str = Field(..., min_length=1)
    parameter_id: int = Field(...)
    shape: ParameterShape
    is_weight_variation: bool = True
    units_are_natural: bool = False
    central_value: float | None = None
    one_sigma_shifts: tuple[float | None, float | None] = (None, None)
    validity_range: tuple[float | None, float | None] = (None, None)
    options: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_central_value(self) -> Self:
        if isinstance(self.shape, CorrectionShape) and self.central_value is not None:
            raise ValueError(
                (
                    f"Parameter '{self.display_name}' is a correction; set its "
                    f"central value on the shape, not on the definition."
                )
            )
        return self

    @model_validator(mode="after")
    def validate_range_order(self) -> Self:
        lower, upper = self.validity_range
        if lower is not None and upper is not None and lower > upper:
            raise ValueError(
                (
                    f"Validity range lower bound ({lower}) exceeds upper bound "
                    f"({upper}) for parameter '{self.display_name}'."
                )
            )
        return self

    @property
    def kind(self) -> ParameterKind:
        return ParameterKind(self.shape.kind)

    def to_header(self) -> ParameterHeader:
        """
        Build the equivalent parameter header.

        Returns
        -------
        ParameterHeader
            A header that passes `validate`.
        """
        header = ParameterHeader(
            display_name=self.display_name,
            parameter_id=self.parameter_id,
            is_weight_variation=self.is_weight_variation,
            units_are_natural=self.units_are_natural,
            central_value=self.central_value,
            one_sigma_shifts=self.one_sigma_shifts,
            validity_range=self.validity_range,
            options=list(self.options),
        )
        shape = self.shape
        if isinstance(shape, CorrectionShape):
            header.is_correction = True
            header.central_value = shape.central_value
            if shape.response_parameter_id is not None:
                header.is_responseless = True
                header.response_parameter_id = shape.response_parameter_id
            return header

        header.variations = list(shape.variations)
        header.is_splineable = shape.sampling == VariationSampling.SPLINE
        header.is_randomly_thrown = shape.sampling == VariationSampling.RANDOM_THROW
        if isinstance(shape, AggregateShape):
            header.varies_per_event = False
            header.responses = list(shape.responses)
        elif isinstance(shape, ResponselessShape):
            header.is_responseless = True
            header.response_parameter_id = shape.response_parameter_id
        return header

    @classmethod
    def from_header(cls, header: ParameterHeader) -> Self:
        """
        Build a definition from a parameter header.

        Fields that carry no meaning for the header's kind are dropped, so
        `from_header(header).to_header()` can differ from `header`:

        - `is_splineable` and `is_randomly_thrown` on a correction.
        - `response_parameter_id` on a header that is not responseless.

        Parameters
        ----------
        header : ParameterHeader
            The header to convert.

        Returns
        -------
        ParameterDefinition
            The structured equivalent of the header.

        Raises
        ------
        InvalidParameterHeaderError
            If the header fails validation.
        pydantic.ValidationError
            If the header's validity range has its lower bound above its upper
            bound.
        """
        violation = find_violation(header)
        if violation is not None:
            raise InvalidParameterHeaderError.from_violation(violation)

        parameter_id = header.parameter_id
        if parameter_id is None:
            raise InvalidParameterHeaderError(
                f"ParameterHeader '{header.display_name}' has no parameter_id."
            )

        if header.is_splineable:
            sampling = VariationSampling.SPLINE
        elif header.is_randomly_thrown:
            sampling = VariationSampling.RANDOM_THROW
        else:
            sampling = VariationSampling.MULTISIM

        central_value = header.central_value
        response_parameter_id = (
            header.response_parameter_id if header.is_responseless else None
        )
        shape: ParameterShape
        if header.is_correction:
            if central_value is None:
                raise InvalidParameterHeaderError(
                    f"Correction '{header.display_name}' has no central_value."
                )
            shape = CorrectionShape(
                central_value=central_value,
                response_parameter_id=response_parameter_id,
            )
            central_value = None
        elif response_parameter_id is not None:
            shape = ResponselessShape(
                variations=header.variations,
                response_parameter_id=response_parameter_id,
                sampling=sampling,
            )
        elif header.is_responseless:
            raise InvalidParameterHeaderError(
                (
                    f"Responseless parameter '{header.display_name}' has no "
                    f"response_parameter_id."
                )
            )
        elif not header.varies_per_event:
            shape = AggregateShape(
                variations=header.variations,
                responses=header.responses,
                sampling=sampling,
            )
        else:
            shape = EventByEventShape(variations=header.variations, sampling=sampling)

        return cls(
            display_name=header.display_name,
            parameter_id=parameter_id,
            shape=shape,
            is_weight_variation=header.is_weight_variation,
            units_are_natural=header.units_are_natural,
            central_value=central_value,
            one_sigma_shifts=header.one_sigma_shifts,
            validity_range=header.validity_range,
            options=list(header.options),
        )
