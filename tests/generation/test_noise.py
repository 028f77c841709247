"""Tests for NoiseField, NoiseFieldLayer and spawn_perlin."""

from __future__ import annotations

import numpy as np
import pytest

from procmap.generation.layers import NoiseField, NoiseFieldLayer, NoiseOptions, banded
from procmap.generator import Generator
from procmap.grid import Grid
from procmap.util.rng import RNGStream


def three_bands(value: float) -> int:
    if value > 0.66:
        return 2
    if value > 0.33:
        return 1
    return 0


class TestNoiseOptions:
    """Validation of noise options."""

    def test_defaults(self) -> None:
        options = NoiseOptions()

        assert options.frequency > 0
        assert options.redistribution == 1.0
        assert options.octaves == 1

    @pytest.mark.parametrize(
        "kwargs",
        [{"frequency": 0}, {"frequency": -1.0}, {"redistribution": 0}, {"octaves": 0}],
    )
    def test_invalid_options_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            NoiseOptions(**kwargs)


class TestNoiseField:
    """Sampling the continuous noise function."""

    def test_sample_shape_and_range(self) -> None:
        values = NoiseField(seed=3).sample(40, 10)

        assert values.shape == (40, 10)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_same_seed_same_values(self) -> None:
        a = NoiseField(seed=11).sample(25, 25)
        b = NoiseField(seed=11).sample(25, 25)

        assert np.array_equal(a, b)

    def test_different_seeds_differ(self) -> None:
        a = NoiseField(seed=1).sample(25, 25)
        b = NoiseField(seed=2).sample(25, 25)

        assert not np.array_equal(a, b)

    def test_neighboring_cells_are_correlated(self) -> None:
        """Coherent noise changes smoothly from cell to cell."""
        values = NoiseField(seed=5).sample(64, 64)
        horizontal = np.abs(np.diff(values, axis=0)).mean()
        vertical = np.abs(np.diff(values, axis=1)).mean()

        assert horizontal < 0.1
        assert vertical < 0.1

    def test_redistribution_is_an_exponent(self) -> None:
        base = NoiseField(seed=9).sample(20, 20)
        squared = NoiseField(seed=9, options=NoiseOptions(redistribution=2.0)).sample(
            20, 20
        )

        assert np.allclose(squared, base**2)

    def test_multiple_octaves(self) -> None:
        values = NoiseField(seed=4, options=NoiseOptions(octaves=4)).sample(30, 20)

        assert values.shape == (30, 20)
        assert 0.0 <= values.min() <= values.max() <= 1.0


class TestNoiseFieldLayer:
    """Quantizing the field onto the grid."""

    def test_every_cell_is_quantized_noise(self, rng: RNGStream) -> None:
        """cell(x, y) == quantize(noise(x, y)) for the layer's seed."""
        grid = Grid(40, 10)
        NoiseFieldLayer(three_bands, seed=123).apply(grid, rng)

        values = NoiseField(seed=123).sample(40, 10)
        expected = np.vectorize(three_bands)(values)
        assert np.array_equal(grid.cells, expected)

    def test_overwrites_previous_content(self, rng: RNGStream) -> None:
        grid = Grid(8, 8)
        grid.cells[2:5, 2:5] = 9

        NoiseFieldLayer(lambda value: 1).apply(grid, rng)

        assert np.all(grid.cells == 1)

    def test_quantize_receives_unit_interval_floats(self, rng: RNGStream) -> None:
        seen: list[float] = []

        def record(value: float) -> int:
            seen.append(value)
            return 0

        NoiseFieldLayer(record).apply(Grid(12, 7), rng)

        assert len(seen) == 84
        assert all(type(value) is float for value in seen)
        assert all(0.0 <= value <= 1.0 for value in seen)

    def test_non_integer_label_leaves_grid_untouched(self, rng: RNGStream) -> None:
        grid = Grid(6, 6)
        grid.set(0, 0, 4)
        before = grid.copy()

        with pytest.raises(TypeError):
            NoiseFieldLayer(lambda value: value).apply(grid, rng)

        assert grid == before

    def test_out_of_range_label_leaves_grid_untouched(self, rng: RNGStream) -> None:
        grid = Grid(6, 6)

        with pytest.raises(ValueError):
            NoiseFieldLayer(lambda value: 2**40).apply(grid, rng)

        assert np.all(grid.cells == 0)

    def test_raising_quantize_leaves_grid_untouched(self, rng: RNGStream) -> None:
        grid = Grid(6, 6)
        calls = 0

        def explode(value: float) -> int:
            nonlocal calls
            calls += 1
            if calls > 10:
                raise RuntimeError("boom")
            return 3

        with pytest.raises(RuntimeError):
            NoiseFieldLayer(explode).apply(grid, rng)

        assert np.all(grid.cells == 0)


class TestSpawnPerlin:
    """The fluent spawn_perlin entry point."""

    def test_reproducible_for_seed(self) -> None:
        a = Generator(40, 10, seed=0).spawn_perlin(three_bands)
        b = Generator(40, 10, seed=0).spawn_perlin(three_bands)

        assert a.grid == b.grid
        assert set(a.grid.label_counts()) <= {0, 1, 2}

    def test_generator_options_are_used(self) -> None:
        options = NoiseOptions(frequency=2.0, octaves=3)
        a = Generator(30, 30, seed=2).with_options(options).spawn_perlin(three_bands)
        b = Generator(30, 30, seed=2).spawn_perlin(three_bands, options=options)

        assert a.grid == b.grid

    def test_ignores_previous_operations(self) -> None:
        """Perlin output depends only on its own stream, not prior grid content."""
        plain = Generator(20, 20, seed=8).spawn_perlin(three_bands)
        layered = (
            Generator(20, 20, seed=8)
            .spawn_repeated(5, 30)
            .spawn_terrain(6, 40)
            .spawn_perlin(three_bands)
        )

        assert plain.grid == layered.grid


class TestBanded:
    """The threshold quantizer helper."""

    def test_counts_exceeded_thresholds(self) -> None:
        quantize = banded([0.33, 0.66])

        assert quantize(0.0) == 0
        assert quantize(0.33) == 0
        assert quantize(0.5) == 1
        assert quantize(0.66) == 1
        assert quantize(0.9) == 2

    def test_matches_three_bands(self) -> None:
        quantize = banded([0.33, 0.66])
        for value in np.linspace(0.0, 1.0, 101):
            assert quantize(float(value)) == three_bands(float(value))

    @pytest.mark.parametrize("thresholds", [[], [0.5, 0.2]])
    def test_invalid_thresholds(self, thresholds: list[float]) -> None:
        with pytest.raises(ValueError):
            banded(thresholds)
