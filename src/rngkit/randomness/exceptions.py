"""
============================
Randomness System Exceptions
============================

Errors related to improper use of the randomness utilities.

"""
from rngkit.exceptions import RngkitError


class RandomnessError(RngkitError):
    """Raised for violated preconditions in random number and choice generation."""

    pass


class UnseededGeneratorError(RandomnessError):
    """Raised when a generator that must be seeded explicitly is used without a seed."""

    pass
