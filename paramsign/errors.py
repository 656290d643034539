"""Error types raised by the signing core."""


class SignatoryError(ValueError):
    """Base class for signing / token errors."""


class EncodingError(SignatoryError):
    """A parameter set (or a value in it) cannot be rendered to text."""


class DecodingError(SignatoryError):
    """A token is not valid base64 text or does not hold a JSON object."""
