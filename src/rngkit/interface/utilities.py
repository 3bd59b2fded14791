"""
=======================
Interface Utility Tools
=======================

"""
from __future__ import annotations

import functools
from bdb import BdbQuit
from collections.abc import Callable
from typing import Any

import click

from rngkit.exceptions import RngkitError


def handle_exceptions(
    func: Callable[..., Any], logger: Any, with_debugger: bool
) -> Callable[..., Any]:
    """Reports errors raised by func, optionally in an interactive debugger.

    Errors from ``rngkit`` itself are usage problems, so they are logged and
    turned into a :class:`click.ClickException`. Anything else is logged with
    its traceback and re-raised.
    """

    @functools.wraps(func)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (BdbQuit, KeyboardInterrupt, click.ClickException):
            raise
        except Exception as e:
            if with_debugger:
                import pdb
                import traceback

                traceback.print_exc()
                pdb.post_mortem()
                raise
            if isinstance(e, RngkitError):
                logger.error("{}: {}", type(e).__name__, e)
                raise click.ClickException(str(e)) from e
            logger.exception("Uncaught exception {}", e)
            raise

    return wrapped
