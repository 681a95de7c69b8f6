"""Tests for CosineBasis transform system."""

import numpy as np
import pytest

from blurhash_ecs.components.coefficients import Coefficients
from blurhash_ecs.components.image import RGBA, ReconRGBA
from blurhash_ecs.core.color import linear_to_srgb, srgb_to_linear
from blurhash_ecs.core.world import World
from blurhash_ecs.errors import BlurhashRangeError
from blurhash_ecs.systems.cosine import CosineBasis, basis_matrix


def _analyse(image: np.ndarray, x_components: int, y_components: int) -> np.ndarray:
    world = World()
    eid = world.spawn_image(image)
    CosineBasis(x_components=x_components, y_components=y_components).run(world, [eid])
    return world.get_component(eid, Coefficients).values


def _synthesise(values: np.ndarray, width: int, height: int, linear: bool = False) -> ReconRGBA:
    world = World()
    eid = world.new_entity()
    world.add_component(eid, Coefficients(values=values))
    CosineBasis(width=width, height=height, linear=linear, mode="inverse").run(world, [eid])
    return world.get_component(eid, ReconRGBA)


class TestBasisMatrix:
    """Tests for basis_matrix."""

    def test_shape(self) -> None:
        """Test (size, count) shape."""
        assert basis_matrix(8, 3).shape == (8, 3)

    def test_dc_column_is_one(self) -> None:
        """Test frequency 0 is constant."""
        np.testing.assert_array_equal(basis_matrix(5, 4)[:, 0], 1.0)

    def test_first_position_is_one(self) -> None:
        """Test position 0 is 1 for every frequency."""
        np.testing.assert_array_equal(basis_matrix(5, 4)[0], 1.0)

    def test_known_value(self) -> None:
        """Test cos(pi * p * k / size)."""
        assert basis_matrix(4, 2)[2, 1] == pytest.approx(np.cos(np.pi / 2))


class TestCosineBasisSetup:
    """Tests for construction and component declarations."""

    def test_forward_components(self) -> None:
        """Test forward mode maps RGBA to Coefficients."""
        system = CosineBasis()
        assert system.required_components() == [RGBA]
        assert system.produced_components() == [Coefficients]

    def test_inverse_components(self) -> None:
        """Test inverse mode maps Coefficients to ReconRGBA."""
        system = CosineBasis(width=4, height=4, mode="inverse")
        assert system.required_components() == [Coefficients]
        assert system.produced_components() == [ReconRGBA]

    def test_inverse_keeps_output_size(self) -> None:
        """Test inverse mode stores the validated output size as ints."""
        system = CosineBasis(width=7, height=5, mode="inverse")
        assert (system.width, system.height) == (7, 5)

    def test_inverse_output_size_used(self) -> None:
        """Test inverse output follows the stored size."""
        recon = _synthesise(np.zeros((1, 1, 3)), width=7, height=5)
        assert recon.pix.shape == (5, 7, 4)

    @pytest.mark.parametrize("grid", [(0, 3), (4, 0), (10, 1), (1, 10)])
    def test_invalid_component_counts(self, grid: tuple[int, int]) -> None:
        """Test counts outside [1, 9]."""
        with pytest.raises(BlurhashRangeError):
            CosineBasis(x_components=grid[0], y_components=grid[1])

    @pytest.mark.parametrize("size", [(None, 4), (4, None), (0, 4), (4, -1)])
    def test_inverse_requires_positive_size(self, size: tuple) -> None:
        """Test inverse mode needs an output size."""
        with pytest.raises(BlurhashRangeError):
            CosineBasis(width=size[0], height=size[1], mode="inverse")


class TestForward:
    """Tests for the forward transform."""

    def test_output_shape(self) -> None:
        """Test coefficients are (y, x, 3)."""
        image = np.random.randint(0, 256, (6, 8, 4), dtype=np.uint8)
        assert _analyse(image, 4, 3).shape == (3, 4, 3)

    def test_dc_is_average_linear_colour(self) -> None:
        """Test DC equals the mean of linear pixels."""
        image = np.random.randint(0, 256, (5, 7, 4), dtype=np.uint8)
        values = _analyse(image, 3, 3)
        expected = srgb_to_linear(image[..., :3]).mean(axis=(0, 1))
        np.testing.assert_allclose(values[0, 0], expected)

    def test_alpha_ignored(self) -> None:
        """Test alpha channel has no effect."""
        image = np.random.randint(0, 256, (4, 4, 4), dtype=np.uint8)
        other = image.copy()
        other[..., 3] = 0
        np.testing.assert_array_equal(_analyse(image, 3, 3), _analyse(other, 3, 3))

    def test_flat_image_frequencies(self) -> None:
        """Test a flat image: even AC terms vanish, odd ones equal 2 * colour / size."""
        image = np.full((8, 8, 4), 200, dtype=np.uint8)
        values = _analyse(image, 3, 3)
        colour = srgb_to_linear(200)

        np.testing.assert_allclose(values[0, 0], colour)
        np.testing.assert_allclose(values[0, 2], 0.0, atol=1e-12)
        np.testing.assert_allclose(values[2, 0], 0.0, atol=1e-12)
        np.testing.assert_allclose(values[0, 1], 2 * colour / 8)
        np.testing.assert_allclose(values[1, 0], 2 * colour / 8)

    def test_horizontal_split(self) -> None:
        """Test bright-left image has a positive first horizontal term."""
        image = np.zeros((4, 8, 4), dtype=np.uint8)
        image[:, :4, :3] = 255
        values = _analyse(image, 2, 1)
        assert np.all(values[0, 1] > 0)


class TestInverse:
    """Tests for the inverse transform."""

    def test_dc_only_is_flat(self) -> None:
        """Test a single coefficient produces a flat opaque image."""
        colour = srgb_to_linear(np.array([10, 120, 250]))
        recon = _synthesise(colour.reshape(1, 1, 3), width=5, height=3)

        assert recon.colorspace == "sRGB"
        assert recon.pix.shape == (3, 5, 4)
        assert recon.pix.dtype == np.uint8
        np.testing.assert_array_equal(recon.pix[..., :3], np.broadcast_to([10, 120, 250], (3, 5, 3)))
        np.testing.assert_array_equal(recon.pix[..., 3], 255)

    def test_single_pixel_sums_all_terms(self) -> None:
        """Test a 1x1 output adds every coefficient (all cosines are 1)."""
        values = np.random.uniform(-0.1, 0.1, (3, 4, 3))
        values[0, 0] = 0.4
        recon = _synthesise(values, width=1, height=1)
        expected = linear_to_srgb(values.sum(axis=(0, 1)))
        np.testing.assert_array_equal(recon.pix[0, 0, :3], expected)

    def test_linear_output(self) -> None:
        """Test linear mode returns float sums without alpha."""
        values = np.zeros((2, 2, 3))
        values[0, 0] = 0.25
        values[0, 1] = 0.5
        recon = _synthesise(values, width=2, height=2, linear=True)

        assert recon.colorspace == "linear"
        assert recon.pix.shape == (2, 2, 3)
        # cos(0) = 1 at w = 0, cos(pi / 2) = 0 at w = 1
        np.testing.assert_allclose(recon.pix[:, 0], 0.75)
        np.testing.assert_allclose(recon.pix[:, 1], 0.25, atol=1e-12)

    def test_matches_direct_summation(self) -> None:
        """Test vectorised synthesis against the per-pixel formula."""
        values = np.random.uniform(-0.2, 0.6, (3, 4, 3))
        width, height = 6, 5
        recon = _synthesise(values, width=width, height=height, linear=True)

        for h in range(height):
            for w in range(width):
                total = np.zeros(3)
                for y in range(3):
                    for x in range(4):
                        basis = np.cos(np.pi * w * x / width) * np.cos(np.pi * h * y / height)
                        total += values[y, x] * basis
                np.testing.assert_allclose(recon.pix[h, w], total, atol=1e-12)

    def test_deterministic(self) -> None:
        """Test repeated synthesis is byte-identical."""
        values = np.random.uniform(0.0, 0.5, (2, 3, 3))
        first = _synthesise(values, width=9, height=7).pix
        second = _synthesise(values, width=9, height=7).pix
        np.testing.assert_array_equal(first, second)
