"""
==========================
rngkit Command Line Tools
==========================

``rngkit`` provides the tool :command:`rngkit` for drawing samples from the
command line, mostly to eyeball a distribution or to reproduce a server
draw.  It provides three subcommands:

.. list-table:: ``rngkit`` sub-commands
    :header-rows: 1
    :widths: 30, 40

    *   - Name
        - Description
    *   - | **draw**
        - | Draws samples from one of the sampling operations.
    *   - | **pick**
        - | Picks items uniformly or by weight.
    *   - | **shuffle**
        - | Prints a random permutation of the given items.

.. click:: rngkit.interface.cli:rngkit
   :prog: rngkit
   :show-nested:

"""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import numpy as np
from loguru import logger

from rngkit.configuration import build_randomness_configuration
from rngkit.interface.utilities import handle_exceptions
from rngkit.logging import configure_logging_to_terminal
from rngkit.randomness import (
    FastRandomTraits,
    Random,
    RandomBase,
    ServerRandom,
    ServerRandomTraits,
)

INTEGER_OPERATIONS = {"uniform", "probability", "yes_no"}
FLOAT_OPERATIONS = {"uniformf", "probabilityf", "normalf", "triangularf"}

_seed_option = click.option(
    "--seed",
    "-s",
    type=int,
    default=None,
    help=(
        "Seed for the generator. Without it the fast generator is seeded from "
        "system entropy."
    ),
)
_server_option = click.option(
    "--server",
    is_flag=True,
    help="Draw from the server generator. Requires --seed or --configuration.",
)
_configuration_option = click.option(
    "--configuration",
    "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="A yaml randomness configuration used to seed the server generator.",
)
_count_option = click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of samples to draw.",
)
_verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Logs verbosely. Useful for debugging and development.",
)
_pdb_option = click.option(
    "--pdb",
    "with_debugger",
    is_flag=True,
    help="Drop into python debugger if an error occurs.",
)


@click.group()
def rngkit() -> None:
    """A command line utility for drawing random samples.

    Use ``draw`` to sample from a distribution, ``pick`` to select among
    items and ``shuffle`` to permute them.
    """
    pass


@rngkit.command()
@click.argument(
    "operation", type=click.Choice(sorted(INTEGER_OPERATIONS | FLOAT_OPERATIONS))
)
@click.argument("parameters", nargs=-1, type=float)
@_count_option
@click.option(
    "--dtype",
    type=str,
    default=None,
    help="Numpy dtype of the samples, e.g. int32 or float32.",
)
@_seed_option
@_server_option
@_configuration_option
@_verbose_option
@_pdb_option
def draw(
    operation: str,
    parameters: tuple[float, ...],
    count: int,
    dtype: str | None,
    seed: int | None,
    server: bool,
    configuration: str | None,
    verbose: bool,
    with_debugger: bool,
) -> None:
    """Draw COUNT samples from OPERATION.

    PARAMETERS are passed to the operation positionally, e.g.
    ``rngkit draw uniform 5 10`` or ``rngkit draw triangularf 0 1 0.25``.
    Pass ``--`` before negative parameters.
    """
    _configure_logging(verbose)

    def main() -> None:
        utility, generator = _get_utility(seed, server, configuration)
        sampler = _get_sampler(utility, operation, parameters, dtype)
        for _ in range(count):
            click.echo(_format(sampler(generator)))

    handle_exceptions(main, logger, with_debugger)()


@rngkit.command()
@click.argument("items", nargs=-1, required=True)
@click.option(
    "--weight",
    "-w",
    "weights",
    type=float,
    multiple=True,
    help="Weight of the item in the same position. Give one per item or none.",
)
@_count_option
@_seed_option
@_server_option
@_configuration_option
@_verbose_option
@_pdb_option
def pick(
    items: tuple[str, ...],
    weights: tuple[float, ...],
    count: int,
    seed: int | None,
    server: bool,
    configuration: str | None,
    verbose: bool,
    with_debugger: bool,
) -> None:
    """Pick COUNT of ITEMS, uniformly or in proportion to their weights."""
    _configure_logging(verbose)
    if weights and len(weights) != len(items):
        raise click.UsageError(
            f"Got {len(weights)} weights for {len(items)} items. Give one weight per item."
        )

    def main() -> None:
        utility, generator = _get_utility(seed, server, configuration)
        for _ in range(count):
            if weights:
                click.echo(utility.weighted_from(weights, items, generator=generator))
            else:
                click.echo(utility.uniform_from(items, generator=generator))

    handle_exceptions(main, logger, with_debugger)()


@rngkit.command()
@click.argument("items", nargs=-1, required=True)
@_seed_option
@_server_option
@_configuration_option
@_verbose_option
@_pdb_option
def shuffle(
    items: tuple[str, ...],
    seed: int | None,
    server: bool,
    configuration: str | None,
    verbose: bool,
    with_debugger: bool,
) -> None:
    """Print ITEMS in a random order, one per line."""
    _configure_logging(verbose)

    def main() -> None:
        utility, generator = _get_utility(seed, server, configuration)
        permutation = list(items)
        utility.shuffle(permutation, generator=generator)
        for item in permutation:
            click.echo(item)

    handle_exceptions(main, logger, with_debugger)()


def _configure_logging(verbose: bool) -> None:
    # Samples go to stdout, so only warnings are logged unless asked for more.
    configure_logging_to_terminal(verbosity=2 if verbose else 0, long_format=False)


def _get_utility(
    seed: int | None, server: bool, configuration: str | None
) -> tuple[type[RandomBase], np.random.Generator | None]:
    if server:
        if seed is not None:
            ServerRandomTraits.seed(seed)
        else:
            config = build_randomness_configuration(
                Path(configuration) if configuration is not None else None
            )
            ServerRandomTraits.seed_from_configuration(config)
        return ServerRandom, None

    if seed is not None:
        logger.info("Drawing from a fast generator seeded with {}.", seed)
        return Random, FastRandomTraits.make_generator(seed)
    return Random, None


def _get_sampler(
    utility: type[RandomBase],
    operation: str,
    parameters: tuple[float, ...],
    dtype: str | None,
) -> Callable[[np.random.Generator | None], Any]:
    method = getattr(utility, operation)
    kwargs: dict[str, Any] = {}
    if operation in INTEGER_OPERATIONS:
        if any(not p.is_integer() for p in parameters):
            raise click.BadParameter(
                f"{operation} takes integer parameters, got {parameters}.",
                param_hint="PARAMETERS",
            )
        parameters = tuple(int(p) for p in parameters)
    if dtype is not None and operation != "yes_no":
        kwargs["dtype"] = dtype

    def sampler(generator: np.random.Generator | None) -> Any:
        try:
            return method(*parameters, generator=generator, **kwargs)
        except TypeError as e:
            raise click.BadParameter(str(e), param_hint="PARAMETERS") from e

    return sampler


def _format(value: Any) -> str:
    if isinstance(value, (bool, np.bool_)):
        return "yes" if value else "no"
    return str(value)
