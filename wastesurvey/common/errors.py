"""Domain errors and failure typing."""


class SurveyError(Exception):
    """Base class for survey client failures."""

    error_code = "SURVEY_ERROR"


class ConfigError(SurveyError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StoreError(SurveyError):
    """Raised when the record store cannot complete an operation."""

    error_code = "STORE_ERROR"


class TransportFailure(StoreError):
    """Network, HTTP status or payload decoding failure."""

    error_code = "TRANSPORT_FAILURE"


class StoreRejection(StoreError):
    """The store answered with a well-formed error envelope."""

    error_code = "STORE_REJECTION"


class ValidationFailure(SurveyError):
    """Raised before any network call when a draft cannot be persisted."""

    error_code = "VALIDATION_FAILURE"


class DuplicateDeclined(ValidationFailure):
    error_code = "DUPLICATE_DECLINED"
