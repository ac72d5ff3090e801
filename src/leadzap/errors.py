"""Exception types raised by leadzap services."""


class LeadzapError(Exception):
    """Base class for leadzap errors."""


class ConfigurationError(LeadzapError):
    """Raised when provider settings are incomplete for the selected provider."""


class InvalidRequestError(LeadzapError):
    """Raised when a request payload is missing required fields."""


class GatewayError(LeadzapError):
    """Raised when the WhatsApp gateway answers a lookup with a non-2xx status."""
