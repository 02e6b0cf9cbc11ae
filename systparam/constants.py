from enum import StrEnum, unique


@unique
class HeaderRule(StrEnum):
    MISSING_IDENTITY = "missing_identity"
    MISSING_NAME = "missing_name"
    CORRECTION_MISSING_CENTRAL_VALUE = "correction_missing_central_value"
    CORRECTION_WITH_VARIATIONS_OR_RESPONSES = "correction_with_variations_or_responses"
    NON_CORRECTION_MISSING_VARIATIONS = "non_correction_missing_variations"
    SPLINEABLE_ALSO_RANDOM = "splineable_also_random"
    SPLINEABLE_ALSO_RESPONSELESS = "splineable_also_responseless"
    RESPONSELESS_HAS_HEADER_RESPONSES = "responseless_has_header_responses"
    RESPONSELESS_MISSING_TARGET_ID = "responseless_missing_target_id"
    EVENT_BY_EVENT_HAS_HEADER_RESPONSES = "event_by_event_has_header_responses"
    AGGREGATE_MISSING_HEADER_RESPONSES = "aggregate_missing_header_responses"
    AGGREGATE_RESPONSE_VARIATION_COUNT_MISMATCH = (
        "aggregate_response_variation_count_mismatch"
    )


@unique
class ParameterKind(StrEnum):
    CORRECTION = "correction"
    EVENT_BY_EVENT = "event_by_event"
    AGGREGATE = "aggregate"
    RESPONSELESS = "responseless"


@unique
class VariationSampling(StrEnum):
    SPLINE = "spline"
    MULTISIM = "multisim"
    RANDOM_THROW = "random_throw"
