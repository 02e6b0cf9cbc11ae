from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from systparam.validation import HeaderViolation


class InvalidParameterHeaderError(ValueError):
    """
    Raised when a parameter header fails validation before it is committed.

    `validate` never raises this error; construction layers do, once they have
    decided a failed header must be rejected.

    Attributes
    ----------
    violation : HeaderViolation | None
        The violated rule, when the error stems from a single header check.
    """

    def __init__(self, message: str, violation: "HeaderViolation | None" = None):
        super().__init__(message)
        self.violation = violation

    @classmethod
    def from_violation(
        cls, violation: "HeaderViolation"
    ) -> "InvalidParameterHeaderError":
        return cls(violation.message, violation)
