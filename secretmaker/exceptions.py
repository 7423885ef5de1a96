"""
secretmaker.exceptions
Errors raised by the secret generator. The CLI catches SecretMakerError;
library code never swallows them.
"""


class SecretMakerError(Exception):
    """Base class for every error raised by secretmaker."""


class SecretLengthError(SecretMakerError, ValueError):
    """Requested secret length is outside the supported range."""


class RandomSourceError(SecretMakerError, RuntimeError):
    """The random byte source failed or produced unusable data."""


class SecretAssemblyError(SecretMakerError, RuntimeError):
    """Secret assembly did not finish within its draw budget."""
