class I18nGeneratorError(Exception):
    """Base class for every error that aborts a generator run."""


class ConfigurationError(I18nGeneratorError):
    """Raised for an invalid output format, option value or missing root directory."""


class DataFormatError(I18nGeneratorError):
    """Raised when a translation file cannot be decoded into a mapping."""


class EncodingError(I18nGeneratorError):
    """Raised when the collected translations cannot be serialized to JSON."""
