"""SecretMaker: cryptographic strength random secrets with guaranteed character classes."""

from .exceptions import RandomSourceError, SecretAssemblyError, SecretLengthError, SecretMakerError
from .generator import SecretAssembler, generate, generate_batch
from .randindex import RandomIndexProvider, random_index_in_range

__all__ = [
    "RandomIndexProvider",
    "RandomSourceError",
    "SecretAssembler",
    "SecretAssemblyError",
    "SecretLengthError",
    "SecretMakerError",
    "generate",
    "generate_batch",
    "random_index_in_range",
]
