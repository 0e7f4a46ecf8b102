import logging

import pytest

from chip8_tracer.config.loader import ConfigLoader, resolve_log_level
from chip8_tracer.config.models import DEFAULT_KEYMAP, EmulatorConfig
from chip8_tracer.transport.framebuffer import COLOR_OFF, COLOR_ON

# @intent:test_suite YAML設定の読み込み、既定値の補完、不正値の検出を検証します。

@pytest.fixture
def loader():
    return ConfigLoader()


class TestConfigDefaults:
    def test_empty_document(self, loader):
        config = loader.load_from_string("")
        assert config == EmulatorConfig()
        assert config.steps_per_frame == 8
        assert config.colors.on == COLOR_ON
        assert config.colors.off == COLOR_OFF
        assert config.keymap == DEFAULT_KEYMAP

    def test_default_keymap_is_not_shared(self):
        config = EmulatorConfig()
        config.keymap["X"] = 0xF
        assert DEFAULT_KEYMAP["X"] == 0x0


class TestConfigParsing:
    def test_full_document(self, loader):
        yaml_content = """
quirks: true
step_rate: 600
frame_rate: 60
scale: 8
seed: 0x2A
log_level: debug
colors:
  on: [255, 255, 255]
  off: [0, 0, 0, 128]
keymap:
  x: 0xA
  "5": 3
"""
        config = loader.load_from_string(yaml_content)
        assert config.quirks is True
        assert config.step_rate == 600
        assert config.steps_per_frame == 10
        assert config.scale == 8
        assert config.seed == 42
        assert config.log_level == "DEBUG"
        assert config.colors.on == (255, 255, 255, 255)
        assert config.colors.off == (0, 0, 0, 128)
        assert config.keymap["X"] == 0xA
        assert config.keymap["5"] == 3
        # 指定されていないキーは既定値のまま
        assert config.keymap["Q"] == 0x4

    def test_load_from_file(self, loader, tmp_path):
        path = tmp_path / "chip8.yaml"
        path.write_text("scale: 4\nquirks: false\n")
        config = loader.load_from_file(str(path))
        assert config.scale == 4
        assert config.quirks is False

    def test_steps_per_frame_never_zero(self):
        assert EmulatorConfig(step_rate=30, frame_rate=60).steps_per_frame == 1

    def test_quoted_color_keys(self, loader):
        config = loader.load_from_string('colors:\n  "on": [1, 2, 3]\n  "off": [4, 5, 6]\n')
        assert config.colors.on == (1, 2, 3, 255)
        assert config.colors.off == (4, 5, 6, 255)

    def test_multi_letter_key_name(self, loader):
        config = loader.load_from_string("keymap:\n  Space: 0x5\n")
        assert config.keymap["SPACE"] == 0x5


class TestConfigErrors:
    def test_root_must_be_mapping(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("- 1\n- 2\n")

    def test_invalid_log_level(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("log_level: verbose\n")

    @pytest.mark.parametrize("key", ["step_rate", "frame_rate", "scale"])
    def test_non_positive_rates(self, loader, key):
        with pytest.raises(ValueError):
            loader.load_from_string(f"{key}: 0\n")

    def test_key_code_out_of_range(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("keymap:\n  X: 16\n")

    def test_bool_is_not_an_integer(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("scale: true\n")

    def test_invalid_color(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("colors:\n  on: [300, 0, 0]\n")
        with pytest.raises(ValueError):
            loader.load_from_string("colors:\n  on: [1, 2]\n")

    @pytest.mark.parametrize("value", ["'off'", '"false"', "1"])
    def test_quirks_must_be_boolean(self, loader, value):
        with pytest.raises(ValueError):
            loader.load_from_string(f"quirks: {value}\n")

    def test_color_must_be_a_list(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("colors:\n  on: 5\n")
        with pytest.raises(ValueError):
            loader.load_from_string("colors: [1, 2, 3]\n")


def test_resolve_log_level():
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("WARNING") == logging.WARNING
