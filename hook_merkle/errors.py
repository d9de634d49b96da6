class ConfigurationError(ValueError):
    """Raised when hook definitions, addresses or catalog files are incomplete or invalid."""
