"""
============================
Random Numbers in ``rngkit``
============================

This package contains the sampling and selection utilities and the
generator traits that back them.

Two utilities are provided. :class:`Random` draws from a 32-bit Mersenne
Twister seeded once from system entropy and is the right default for
anything that does not need to be reproduced. :class:`ServerRandom` draws
from a 64-bit PCG generator that refuses to run until it has been seeded
on purpose, either with :meth:`ServerRandomTraits.seed` or from
configuration with :meth:`ServerRandomTraits.seed_from_configuration`.

Every utility method also takes an explicit ``generator`` keyword, which
is how callers running on several threads should use them.

"""
from rngkit.randomness.core import RandomBase, Random, ServerRandom
from rngkit.randomness.exceptions import RandomnessError, UnseededGeneratorError
from rngkit.randomness.traits import (
    FastRandomTraits,
    GeneratorTraits,
    ServerRandomTraits,
    get_hash,
)
