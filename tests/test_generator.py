"""Tests for the fluent Generator API."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from procmap.generation import GenerationLayer, NoiseOptions, SizeRange
from procmap.generator import Generator
from procmap.grid import Grid
from procmap.util.rng import RNG


class StampLayer(GenerationLayer):
    """Writes one random draw into the top-left cell."""

    def apply(self, grid: Grid, rng: RNG) -> None:
        grid.set(0, 0, rng.randint(1, 10**9))


class TestConstruction:
    """Creating generators."""

    def test_starts_filled_with_background(self) -> None:
        generator = Generator(4, 3, background=2, seed=0)

        assert generator.dimensions() == (4, 3)
        assert generator.width == 4
        assert generator.height == 3
        assert generator.to_flat() == [2] * 12

    @pytest.mark.parametrize(("width", "height"), [(0, 1), (1, 0)])
    def test_rejects_empty_grid(self, width: int, height: int) -> None:
        with pytest.raises(ValueError):
            Generator(width, height)

    def test_repr(self) -> None:
        assert repr(Generator(3, 2, seed="abc")) == (
            "Generator(width=3, height=2, background=0, seed='abc')"
        )


class TestChaining:
    """Operations return the generator and run in call order."""

    def test_every_operation_returns_self(
        self, make_generator: Callable[..., Generator]
    ) -> None:
        generator = make_generator(30, 30)
        size = SizeRange(width_range=(2, 4), height_range=(2, 4))

        assert generator.spawn_terrain(1, 10) is generator
        assert generator.spawn_rooms(1, 2, size, label=2) is generator
        assert generator.spawn_repeated(3, 2) is generator
        assert generator.spawn_perlin(lambda value: 0) is generator
        assert generator.apply(StampLayer()) is generator
        assert generator.with_seed(5) is generator
        assert generator.with_options(NoiseOptions()) is generator

    def test_same_seed_same_sequence(self) -> None:
        def build() -> Generator:
            size = SizeRange.from_bounds((3, 3), (6, 6))
            return (
                Generator(30, 20, seed="burrito1")
                .spawn_rooms(2, 3, size)
                .spawn_terrain(2, 50)
                .spawn_repeated(3, 5)
            )

        assert build().to_rows() == build().to_rows()

    def test_operation_order_matters(self) -> None:
        """Perlin overwrites everything, so running it last hides earlier work."""
        first = Generator(10, 10, seed=1).spawn_repeated(5, 20)
        first.spawn_perlin(lambda value: 0)
        assert first.grid.label_counts() == {0: 100}

        second = Generator(10, 10, seed=1).spawn_perlin(lambda value: 0)
        second.spawn_repeated(5, 20)
        assert second.grid.label_counts().get(5, 0) > 0


class TestSeeding:
    """Seed handling and random stream isolation."""

    def test_seed_property(self) -> None:
        assert Generator(2, 2, seed=42).seed == 42

    def test_with_seed_restarts_streams(self) -> None:
        a = Generator(5, 5, seed=1).apply(StampLayer())
        b = Generator(5, 5, seed=2).with_seed(1).apply(StampLayer())

        assert b.seed == 1
        assert a.get(0, 0) == b.get(0, 0)

    def test_with_seed_keeps_grid_content(self) -> None:
        generator = Generator(5, 5, seed=1).spawn_terrain(1, 5)
        before = generator.to_rows()

        generator.with_seed(99)

        assert generator.to_rows() == before

    def test_apply_uses_class_named_stream(self) -> None:
        a = Generator(5, 5, seed=3).apply(StampLayer())
        b = Generator(5, 5, seed=3).apply(StampLayer(), domain="layer.StampLayer")
        c = Generator(5, 5, seed=3).apply(StampLayer(), domain="something.else")

        assert a.get(0, 0) == b.get(0, 0)
        # Different stream, different draw
        assert a.get(0, 0) != c.get(0, 0)


class TestInvalidConfiguration:
    """Invalid arguments raise before the grid is touched."""

    def test_rooms_min_above_max(self) -> None:
        generator = Generator(10, 10, seed=0)
        size = SizeRange(width_range=(2, 3), height_range=(2, 3))

        with pytest.raises(ValueError):
            generator.spawn_rooms(5, 2, size)

        assert generator.grid.label_counts() == {0: 100}

    def test_negative_counts(self) -> None:
        generator = Generator(10, 10, seed=0)

        with pytest.raises(ValueError):
            generator.spawn_terrain(1, -1)
        with pytest.raises(ValueError):
            generator.spawn_repeated(1, -3)

        assert generator.grid.label_counts() == {0: 100}


class TestRendering:
    """Text output."""

    def test_str_is_plain_rows(self) -> None:
        generator = Generator(3, 2, seed=0)
        generator.grid.set(2, 1, 7)

        assert str(generator) == "0 0 0\n0 0 7"

    def test_show_prints_plain_text(self, capsys: pytest.CaptureFixture) -> None:
        Generator(2, 2, seed=0).show(color=False)

        assert capsys.readouterr().out == "0 0\n0 0\n"

    def test_show_with_color_emits_escape_codes(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        Generator(2, 2, seed=0).show(color=True)

        assert "\x1b[" in capsys.readouterr().out

    def test_show_defaults_to_plain_when_not_a_terminal(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        # pytest's captured stdout is not a tty
        Generator(2, 1, seed=0).show()

        assert capsys.readouterr().out == "0 0\n"
