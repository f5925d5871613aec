"""Error taxonomy for DualModel."""

from __future__ import annotations


class DualModelError(Exception):
    """Base class for all DualModel failures."""

    code = "DUAL_MODEL_ERROR"


class ConfigurationError(DualModelError):
    """Raised at startup when required configuration is missing."""

    code = "CONFIGURATION_ERROR"


class InvalidArguments(DualModelError):
    """Raised when tool arguments are missing or have the wrong type."""

    code = "INVALID_ARGUMENTS"


class UnknownCapability(DualModelError):
    """Raised when a call names a tool that is not registered."""

    code = "UNKNOWN_CAPABILITY"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class BackendError(DualModelError):
    """Base class for failures talking to a single backend model."""

    code = "BACKEND_ERROR"

    def __init__(self, model: str, message: str):
        self.model = model
        super().__init__(message)


class GatewayError(BackendError):
    """The gateway answered with a non-success status."""

    code = "GATEWAY_ERROR"

    def __init__(self, model: str, status_code: int, raw_body: str):
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(model, f"OpenRouter API error ({status_code}) for {model}: {raw_body}")


class EmptyResponse(BackendError):
    """The gateway answered successfully but returned no usable text."""

    code = "EMPTY_RESPONSE"

    def __init__(self, model: str):
        super().__init__(model, f"No response content from {model}")


class TransportError(BackendError):
    """The gateway could not be reached (DNS, timeout, connection reset)."""

    code = "TRANSPORT_ERROR"

    def __init__(self, model: str, detail: str):
        self.detail = detail
        super().__init__(model, f"Transport error for {model}: {detail}")
