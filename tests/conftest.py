from __future__ import annotations

from collections.abc import Callable

import pytest

from procmap.generator import Generator
from procmap.util.rng import RNGProvider, RNGStream


@pytest.fixture
def rng() -> RNGStream:
    """A deterministic stream for driving layers directly."""
    return RNGProvider(master_seed="tests").get("tests.layer")


@pytest.fixture
def make_generator() -> Callable[..., Generator]:
    """Factory for seeded generators so tests never depend on system entropy."""

    def _make(width: int = 20, height: int = 15, **kwargs) -> Generator:
        kwargs.setdefault("seed", 1234)
        return Generator(width, height, **kwargs)

    return _make
