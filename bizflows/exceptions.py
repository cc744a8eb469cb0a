"""Custom exceptions for the interpretation flows."""


class FlowError(RuntimeError):
    """Base exception for programmer and configuration errors."""


class SchemaWiringError(FlowError):
    """Raised when a template or flow references a field its schema lacks."""


class ProviderUnavailableError(FlowError):
    """Raised when a configured LLM provider cannot be used."""
