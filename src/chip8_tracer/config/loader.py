import logging
from typing import Any, Dict, Optional

import yaml

from chip8_tracer.common.types import Rgba
from .models import DEFAULT_KEYMAP, DisplayColors, EmulatorConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> EmulatorConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        defaults = EmulatorConfig()

        step_rate = self._parse_positive(data.get("step_rate", defaults.step_rate), "step_rate")
        frame_rate = self._parse_positive(data.get("frame_rate", defaults.frame_rate), "frame_rate")
        scale = self._parse_positive(data.get("scale", defaults.scale), "scale")

        seed: Optional[int] = None
        if data.get("seed") is not None:
            seed = self._parse_int(data["seed"])

        log_level = str(data.get("log_level", defaults.log_level)).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {log_level}")

        # Parse Colors
        # YAML 1.1 では裸の on/off キーが真偽値として読まれるため、両方の表記を受け付ける
        colors_data = data.get("colors", {}) or {}
        if not isinstance(colors_data, dict):
            raise ValueError(f"colors must be a mapping, got {type(colors_data).__name__}")
        colors = DisplayColors(
            on=self._parse_color(self._lookup(colors_data, "on", True, defaults.colors.on)),
            off=self._parse_color(self._lookup(colors_data, "off", False, defaults.colors.off)),
        )

        # Parse Keymap (指定されたキーだけ既定値を上書きする)
        keymap = dict(DEFAULT_KEYMAP)
        for key_name, code in (data.get("keymap", {}) or {}).items():
            value = self._parse_int(code)
            if not 0 <= value <= 0xF:
                raise ValueError(f"Key code for '{key_name}' must be 0-15, got {value}")
            keymap[str(key_name).upper()] = value

        return EmulatorConfig(
            quirks=self._parse_bool(data.get("quirks", defaults.quirks), "quirks"),
            step_rate=step_rate,
            frame_rate=frame_rate,
            scale=scale,
            seed=seed,
            log_level=log_level,
            colors=colors,
            keymap=keymap,
        )

    def _lookup(self, data: Dict[Any, Any], name: str, yaml_key: bool, default: Any) -> Any:
        if name in data:
            return data[name]
        return data.get(yaml_key, default)

    def _parse_bool(self, value: Any, name: str) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false, got {value!r}")
        return value

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    def _parse_positive(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ValueError(f"{name} must be positive, got {result}")
        return result

    # @intent:responsibility [R, G, B] または [R, G, B, A] を不透明度付きのRGBAに変換します。
    def _parse_color(self, value: Any) -> Rgba:
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Invalid color: {value}")
        channels = [self._parse_int(c) for c in value]
        if len(channels) == 3:
            channels.append(255)
        if len(channels) != 4 or not all(0 <= c <= 255 for c in channels):
            raise ValueError(f"Invalid color: {value}")
        return tuple(channels)


# @intent:responsibility 設定されたログレベル名をloggingの数値レベルに変換します。
def resolve_log_level(name: str) -> int:
    return getattr(logging, name.upper())
