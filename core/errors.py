"""
Error taxonomy for the scoring engine.

None of these are transient: the engine performs no I/O, so nothing here is
worth retrying. Callers translate them into degraded responses
(see core.services.narrative.describe_unavailable).
"""


class ScoringError(Exception):
    """Base class for all scoring engine failures."""

    code = "SCORING_ERROR"


class InvalidBaselineError(ScoringError):
    """Baseline HRV is zero or negative, so percent deviation is undefined."""

    code = "INVALID_BASELINE"


class NoReadingsError(ScoringError):
    """No daily readings are available to assemble a health context."""

    code = "NO_READINGS"


class InputRangeError(ScoringError, ValueError):
    """An input lies outside the range the formulas accept."""

    code = "INPUT_RANGE"
