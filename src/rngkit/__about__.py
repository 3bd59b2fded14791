__all__ = [
    "__title__",
    "__summary__",
    "__uri__",
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__copyright__",
]

__title__ = "rngkit"
__summary__ = "rngkit is a small random number utility layer built on numpy's bit generators."
__uri__ = "https://github.com/rngkit/rngkit"

__version__ = "0.1.0"

__author__ = "The rngkit developers"
__email__ = "rngkit.dev@gmail.com"

__license__ = "BSD-3-Clause"
__copyright__ = f"Copyright 2026 {__author__}"
