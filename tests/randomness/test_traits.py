from pathlib import Path

import numpy as np
import pytest
from _pytest.logging import LogCaptureFixture

from rngkit.configuration import build_randomness_configuration
from rngkit.randomness import (
    FastRandomTraits,
    ServerRandomTraits,
    UnseededGeneratorError,
    get_hash,
)


def test_get_hash() -> None:
    assert get_hash("server_seed_1") == get_hash("server_seed_1")
    assert get_hash("server_seed_1") != get_hash("server_seed_2")
    assert 0 <= get_hash("server_seed_1") < 2**64 - 1


def test_fast_generator_is_shared() -> None:
    generator = FastRandomTraits.generator()
    assert isinstance(generator, np.random.Generator)
    assert isinstance(generator.bit_generator, np.random.MT19937)
    assert FastRandomTraits.generator() is generator


def test_fast_generator_reset() -> None:
    generator = FastRandomTraits.generator()
    FastRandomTraits.reset()
    assert FastRandomTraits.generator() is not generator


def test_fast_generator_seeded_from_entropy(caplog: LogCaptureFixture) -> None:
    first = FastRandomTraits.generator().integers(0, 2**62)
    FastRandomTraits.reset()
    second = FastRandomTraits.generator().integers(0, 2**62)
    assert first != second
    assert "Seeding shared MT19937 generator from system entropy." in caplog.text


def test_server_generator_requires_seed() -> None:
    with pytest.raises(UnseededGeneratorError, match="ServerRandomTraits.seed"):
        ServerRandomTraits.generator()


def test_server_generator_seed(caplog: LogCaptureFixture) -> None:
    generator = ServerRandomTraits.seed(1234)
    assert isinstance(generator.bit_generator, np.random.PCG64)
    assert ServerRandomTraits.generator() is generator
    assert "Seeded shared PCG64 generator." in caplog.text

    expected = ServerRandomTraits.make_generator(1234).integers(0, 2**62, size=5)
    assert np.array_equal(generator.integers(0, 2**62, size=5), expected)


def test_server_generator_seed_none() -> None:
    with pytest.raises(UnseededGeneratorError):
        ServerRandomTraits.seed(None)


def test_server_generator_reset() -> None:
    ServerRandomTraits.seed(1)
    ServerRandomTraits.reset()
    with pytest.raises(UnseededGeneratorError):
        ServerRandomTraits.generator()


def test_traits_do_not_share_generators() -> None:
    ServerRandomTraits.seed(1)
    assert FastRandomTraits.generator() is not ServerRandomTraits.generator()
    FastRandomTraits.reset()
    assert ServerRandomTraits.generator() is not None


def test_make_generator_is_independent() -> None:
    shared = FastRandomTraits.generator()
    generator = FastRandomTraits.make_generator(3)
    assert generator is not shared
    assert isinstance(generator.bit_generator, np.random.MT19937)
    seed_sequence = np.random.SeedSequence(3)
    assert np.array_equal(
        FastRandomTraits.make_generator(seed_sequence).random(4),
        FastRandomTraits.make_generator(3).random(4),
    )


def test_seed_from_configuration(no_user_config: Path, randomness_config_file: Path) -> None:
    config = build_randomness_configuration(randomness_config_file)
    generator = ServerRandomTraits.seed_from_configuration(config)
    expected = ServerRandomTraits.make_generator(get_hash("1234shard_1"))
    assert np.array_equal(generator.random(5), expected.random(5))


def test_seed_from_configuration_without_additional_seed(no_user_config: Path) -> None:
    config = build_randomness_configuration({"randomness": {"server_seed": 1234}})
    generator = ServerRandomTraits.seed_from_configuration(config)
    expected = ServerRandomTraits.make_generator(get_hash("1234"))
    assert np.array_equal(generator.random(5), expected.random(5))


def test_seed_from_configuration_unset(no_user_config: Path) -> None:
    config = build_randomness_configuration()
    with pytest.raises(UnseededGeneratorError, match="server_seed"):
        ServerRandomTraits.seed_from_configuration(config)
