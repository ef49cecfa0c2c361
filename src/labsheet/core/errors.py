class LabSheetError(Exception):
    """Base error for all user-facing labsheet exceptions."""


class ConfigurationError(LabSheetError):
    """Raised when the backing workbook or paths are misconfigured."""


class ValidationError(LabSheetError):
    """Raised when a record or service input fails its invariants."""


class RecordNotFoundError(LabSheetError):
    """Raised when a service-level lookup by id finds nothing."""


class GatewayError(LabSheetError):
    """Raised when a gateway request is malformed."""
