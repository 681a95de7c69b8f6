"""Tests for codec configuration."""

from pathlib import Path

import numpy as np
import pytest

from blurhash_ecs.api import components, decode_array, encode_image
from blurhash_ecs.config import CodecConfig, load_config

REFERENCE = "LEHV6nWB2yk8pyo0adR*.7kCMdnj"


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "blurhash_ecs.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self) -> None:
        """Test built-in defaults without a file."""
        config = load_config()
        assert config == CodecConfig(x_components=4, y_components=3, punch=1.0)

    def test_load_from_file(self, tmp_path: Path) -> None:
        """Test values from the [blurhash] table."""
        path = _write(tmp_path, "[blurhash]\nx_components = 5\ny_components = 2\npunch = 1.5\n")
        config = load_config(path)
        assert config.x_components == 5
        assert config.y_components == 2
        assert config.punch == 1.5

    def test_missing_section_uses_defaults(self, tmp_path: Path) -> None:
        """Test a file without [blurhash] falls back to defaults."""
        path = _write(tmp_path, "[other]\nvalue = 1\n")
        assert load_config(str(path)) == CodecConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.toml")

    @pytest.mark.parametrize(
        "body",
        [
            "[blurhash]\nx_components = 10\n",
            "[blurhash]\ny_components = 0\n",
            "[blurhash]\npunch = 0\n",
            "[blurhash]\npunch = inf\n",
            "[blurhash]\npunch = nan\n",
            "[blurhash]\nquality = 3\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, body: str) -> None:
        """Test out-of-range or unknown keys raise ValidationError."""
        path = _write(tmp_path, body)
        with pytest.raises(ValueError):
            load_config(path)


class TestConfigInApi:
    """Tests for config defaults flowing into the API."""

    def test_encode_grid_from_config(self, tmp_path: Path) -> None:
        """Test encode picks up the configured grid."""
        path = _write(tmp_path, "[blurhash]\nx_components = 2\ny_components = 5\n")
        image = np.random.randint(0, 256, (6, 6, 3), dtype=np.uint8)
        assert components(encode_image(image, config_path=path)) == (2, 5)

    def test_explicit_argument_wins(self, tmp_path: Path) -> None:
        """Test explicit counts override the file."""
        path = _write(tmp_path, "[blurhash]\nx_components = 2\ny_components = 5\n")
        image = np.random.randint(0, 256, (6, 6, 3), dtype=np.uint8)
        blurhash = encode_image(image, x_components=3, config_path=path)
        assert components(blurhash) == (3, 5)

    def test_decode_punch_from_config(self, tmp_path: Path) -> None:
        """Test decode picks up the configured punch."""
        path = _write(tmp_path, "[blurhash]\npunch = 3.0\n")
        configured = decode_array(8, 8, REFERENCE, config_path=path)
        explicit = decode_array(8, 8, REFERENCE, punch=3.0)
        np.testing.assert_array_equal(configured, explicit)
