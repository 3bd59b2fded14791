from rngkit.__about__ import (
    __author__,
    __copyright__,
    __email__,
    __license__,
    __summary__,
    __title__,
    __uri__,
    __version__,
)
from rngkit.exceptions import RngkitError
from rngkit.randomness import (
    FastRandomTraits,
    Random,
    RandomBase,
    RandomnessError,
    ServerRandom,
    ServerRandomTraits,
    UnseededGeneratorError,
)
