"""
Custom exceptions for the application

The index engine itself never raises for malformed input; these errors are
reported at the boundaries (injected capabilities, HTTP and CLI entry points).
"""


class PSYSException(Exception):
    """Base exception for the PSYS application"""

    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class CapabilityError(PSYSException):
    """Raised when an injected capability fails or returns an unusable result"""

    def __init__(self, capability: str, message: str = None):
        if message is None:
            message = f"Capability '{capability}' failed"
        super().__init__(message, status_code=502, details={"capability": capability})


class PayloadError(PSYSException):
    """Raised by the CLI when an input file is not a JSON object

    The HTTP layer rejects such bodies during request validation (422).
    """

    def __init__(self, message: str = "Payload must be a JSON object", details: dict = None):
        super().__init__(message, status_code=400, details=details)
