import logging

import pytest

from systparam import HeaderRule, ParameterHeader, find_violation, validate


def rule_of(header: ParameterHeader) -> HeaderRule | None:
    violation = find_violation(header)
    return violation.rule if violation is not None else None


class TestValidate:
    @pytest.fixture
    def correction(self) -> ParameterHeader:
        return ParameterHeader(
            display_name="FluxNorm",
            parameter_id=1,
            is_correction=True,
            central_value=1.1,
        )

    @pytest.fixture
    def event_by_event(self) -> ParameterHeader:
        return ParameterHeader(
            display_name="MaCCQE",
            parameter_id=2,
            is_splineable=True,
            variations=[-2.0, -1.0, 0.0, 1.0, 2.0],
        )

    @pytest.fixture
    def aggregate(self) -> ParameterHeader:
        return ParameterHeader(
            display_name="NormCCCOH",
            parameter_id=3,
            varies_per_event=False,
            variations=[-1.0, 0.0, 1.0],
            responses=[0.8, 1.0, 1.2],
        )

    def test_default_header_fails_on_identity(self):
        """
        Test that a default-constructed header never validates.
        """
        header = ParameterHeader()
        assert not validate(header, verbose=False)
        assert rule_of(header) == HeaderRule.MISSING_IDENTITY

    def test_missing_identity_precedes_everything(self, event_by_event):
        event_by_event.parameter_id = None
        event_by_event.display_name = ""
        assert rule_of(event_by_event) == HeaderRule.MISSING_IDENTITY

    def test_zero_is_a_valid_parameter_id(self, event_by_event):
        event_by_event.parameter_id = 0
        assert validate(event_by_event)

    def test_empty_name_fails(self, correction, event_by_event, aggregate):
        for header in (correction, event_by_event, aggregate):
            header.display_name = ""
            assert not validate(header, verbose=False)
            assert rule_of(header) == HeaderRule.MISSING_NAME

    def test_correction_validates(self, correction):
        assert validate(correction)
        assert find_violation(correction) is None

    def test_correction_requires_central_value(self, correction):
        correction.central_value = None
        assert rule_of(correction) == HeaderRule.CORRECTION_MISSING_CENTRAL_VALUE

    def test_correction_central_value_of_zero_is_set(self, correction):
        correction.central_value = 0.0
        assert validate(correction)

    def test_correction_rejects_variations(self, correction):
        correction.variations.append(1.0)
        assert not validate(correction, verbose=False)
        violation = find_violation(correction)
        assert violation is not None
        assert violation.rule == HeaderRule.CORRECTION_WITH_VARIATIONS_OR_RESPONSES
        assert violation.details == {"n_variations": 1, "n_responses": 0}

    def test_correction_rejects_responses(self, correction):
        correction.responses.append(1.0)
        assert rule_of(correction) == HeaderRule.CORRECTION_WITH_VARIATIONS_OR_RESPONSES

    def test_non_correction_requires_variations(self):
        header = ParameterHeader(display_name="MaRES", parameter_id=4)
        assert rule_of(header) == HeaderRule.NON_CORRECTION_MISSING_VARIATIONS

        header.variations.append(1.0)
        assert validate(header)

    def test_splineable_and_random_always_fails(self, event_by_event, aggregate):
        for header in (event_by_event, aggregate, ParameterHeader()):
            header.is_splineable = True
            header.is_randomly_thrown = True
            assert not validate(header, verbose=False)

        assert rule_of(event_by_event) == HeaderRule.SPLINEABLE_ALSO_RANDOM

    def test_splineable_responseless_fails(self, event_by_event):
        event_by_event.is_responseless = True
        event_by_event.response_parameter_id = 7
        violation = find_violation(event_by_event)
        assert violation is not None
        assert violation.rule == HeaderRule.SPLINEABLE_ALSO_RESPONSELESS
        assert violation.details == {"response_parameter_id": 7}

    def test_responseless_requires_target(self, event_by_event):
        event_by_event.is_splineable = False
        event_by_event.is_responseless = True
        assert rule_of(event_by_event) == HeaderRule.RESPONSELESS_MISSING_TARGET_ID

        event_by_event.response_parameter_id = 12
        assert validate(event_by_event)

    def test_responseless_rejects_responses(self, aggregate):
        aggregate.is_responseless = True
        aggregate.response_parameter_id = 12
        assert rule_of(aggregate) == HeaderRule.RESPONSELESS_HAS_HEADER_RESPONSES

    def test_event_by_event_rejects_responses(self, event_by_event):
        event_by_event.responses = [1.0] * 5
        assert rule_of(event_by_event) == HeaderRule.EVENT_BY_EVENT_HAS_HEADER_RESPONSES

    def test_aggregate_validates(self, aggregate):
        assert validate(aggregate)

    def test_aggregate_requires_responses(self, aggregate):
        aggregate.responses = []
        assert rule_of(aggregate) == HeaderRule.AGGREGATE_MISSING_HEADER_RESPONSES

    def test_aggregate_requires_one_response_per_variation(self, aggregate):
        aggregate.responses = [0.8, 1.2]
        violation = find_violation(aggregate)
        assert violation is not None
        assert violation.rule == HeaderRule.AGGREGATE_RESPONSE_VARIATION_COUNT_MISMATCH
        assert violation.details == {"n_variations": 3, "n_responses": 2}

        aggregate.responses = [0.8, 1.0, 1.2]
        assert validate(aggregate)

    def test_aggregate_correction_never_validates(self, correction):
        """
        Test that the correction rule takes precedence over the aggregate rules.
        """
        correction.varies_per_event = False
        assert rule_of(correction) == HeaderRule.AGGREGATE_MISSING_HEADER_RESPONSES

        correction.responses = [1.1]
        assert rule_of(correction) == HeaderRule.CORRECTION_WITH_VARIATIONS_OR_RESPONSES

    def test_responseless_correction_validates(self, correction):
        correction.is_responseless = True
        correction.response_parameter_id = 5
        assert validate(correction)

    def test_validate_does_not_mutate(self, aggregate):
        aggregate.responses = [1.0]
        before = aggregate.model_copy(deep=True)
        validate(aggregate, verbose=False)
        find_violation(aggregate)
        assert aggregate == before

    def test_verbose_logs_violation(self, aggregate, caplog):
        aggregate.responses = [1.0]
        with caplog.at_level(logging.ERROR, logger="systparam.validation"):
            assert not validate(aggregate)

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert "ParameterHeader(3:'NormCCCOH')" in record.getMessage()
        assert "1 header-level responses for 3 variations" in record.getMessage()

    def test_quiet_logs_nothing(self, aggregate, caplog):
        aggregate.responses = []
        with caplog.at_level(logging.DEBUG, logger="systparam.validation"):
            assert not validate(aggregate, verbose=False)
        assert caplog.records == []

    def test_valid_header_logs_nothing(self, aggregate, caplog):
        with caplog.at_level(logging.DEBUG, logger="systparam.validation"):
            assert validate(aggregate)
        assert caplog.records == []

    def test_every_rule_has_a_message(self):
        headers = [
            ParameterHeader(),
            ParameterHeader(parameter_id=1),
            ParameterHeader(parameter_id=1, display_name="p", is_correction=True),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                is_correction=True,
                central_value=0.0,
                variations=[1.0],
            ),
            ParameterHeader(parameter_id=1, display_name="p"),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                variations=[1.0],
                is_splineable=True,
                is_randomly_thrown=True,
            ),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                variations=[1.0],
                is_splineable=True,
                is_responseless=True,
            ),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                variations=[1.0],
                is_responseless=True,
                responses=[1.0],
            ),
            ParameterHeader(
                parameter_id=1, display_name="p", variations=[1.0], is_responseless=True
            ),
            ParameterHeader(
                parameter_id=1, display_name="p", variations=[1.0], responses=[1.0]
            ),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                variations=[1.0],
                varies_per_event=False,
            ),
            ParameterHeader(
                parameter_id=1,
                display_name="p",
                variations=[1.0],
                varies_per_event=False,
                responses=[1.0, 2.0],
            ),
        ]
        violations = [find_violation(h) for h in headers]
        assert [v.rule for v in violations if v is not None] == list(HeaderRule)
        for violation in violations:
            assert violation is not None
            assert violation.message.startswith("ParameterHeader(")
