class AuditError(Exception):
    """Base class for errors raised by the audit itself."""


class ConfigurationError(AuditError):
    """Credentials or other startup settings are missing."""


class PricingError(AuditError):
    """The price list had no usable on-demand price for a resource type."""
