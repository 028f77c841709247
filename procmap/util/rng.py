"""Seeded random streams, one per generation operation.

A Generator owns one RNGProvider. Every operation asks the provider for the
stream named after it and draws all of its random decisions from that
stream:

    provider = RNGProvider(master_seed="burrito1")
    rooms = provider.get("spawn.rooms")
    width = rooms.randint(4, 10)

Streams are derived from the master seed and the stream name alone, so the
rooms an operation places do not depend on how many numbers the terrain or
scatter operations consumed before it. The same master seed always gives the
same map, across runs and Python sessions.

Stream names in use:
    - "spawn.terrain", "spawn.rooms", "spawn.noise", "spawn.scatter"
    - "layer.<ClassName>" for layers applied through Generator.apply()
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from procmap.types import RandomSeed

T = TypeVar("T")


def derive_seed(master_seed: int | str, domain: str) -> int:
    """Stable 32-bit seed for a named stream.

    crc32 rather than hash(): str hashes change between interpreter runs
    unless PYTHONHASHSEED is pinned.
    """
    return zlib.crc32(f"{master_seed}:{domain}".encode())


class RNGStream:
    """Handle on a provider's named stream.

    Layers may hold on to a stream; after the provider is reseeded the same
    handle draws from the fresh sequence.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self.domain = domain

    def _random(self) -> Random:
        return self._provider._random_for(self.domain)

    def random(self) -> float:
        return self._random().random()

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both ends inclusive."""
        return self._random().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        return self._random().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        return self._random().choice(seq)

    def shuffle(self, x: list) -> None:
        self._random().shuffle(x)

    def getrandbits(self, k: int) -> int:
        return self._random().getrandbits(k)

    def __repr__(self) -> str:
        return f"RNGStream({self.domain!r})"


# Layers accept either a plain Random (handy in tests) or a provider stream
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out named, independently seeded random streams.

    Attributes:
        master_seed: Seed every stream is derived from. None draws each
            stream's seed from system entropy, so results are not repeatable.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self.master_seed = master_seed
        self._randoms: dict[str, Random] = {}
        self._streams: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Return the stream for domain, creating it on first use."""
        stream = self._streams.get(domain)
        if stream is None:
            stream = self._streams[domain] = RNGStream(self, domain)
        return stream

    def _random_for(self, domain: str) -> Random:
        rand = self._randoms.get(domain)
        if rand is None:
            if self.master_seed is None:
                rand = Random()
            else:
                rand = Random(derive_seed(self.master_seed, domain))
            self._randoms[domain] = rand
        return rand

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every stream from a new master seed.

        Streams already handed out stay valid and restart from the beginning
        of their new sequence.
        """
        self.master_seed = master_seed
        self._randoms.clear()
