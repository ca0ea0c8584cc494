import warnings
import yaml
from typing import Dict, Any
from .models import EmulatorConfig, DisplayConfig, DEFAULT_KEYMAP

_KNOWN_KEYS = {"cpu_hz", "timer_hz", "seed", "history_limit", "display", "keymap"}

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError("Config root must be a mapping.")

        for key in data:
            if key not in _KNOWN_KEYS:
                warnings.warn(f"Unknown config entry '{key}' ignored.", UserWarning)

        display_data = data.get("display", {}) or {}
        if not isinstance(display_data, dict):
            raise ValueError("display must be a mapping.")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", 10)),
            foreground=str(display_data.get("foreground", "#33FF66")),
            background=str(display_data.get("background", "#101010")),
        )

        seed = data.get("seed")
        config = EmulatorConfig(
            cpu_hz=self._parse_int(data.get("cpu_hz", 700)),
            timer_hz=self._parse_int(data.get("timer_hz", 60)),
            seed=self._parse_int(seed) if seed is not None else None,
            history_limit=self._parse_int(data.get("history_limit", 1000)),
            display=display,
            keymap=self._parse_keymap(data.get("keymap")),
        )

        if config.cpu_hz <= 0 or config.timer_hz <= 0:
            raise ValueError("cpu_hz and timer_hz must be positive.")
        if display.scale <= 0:
            raise ValueError("display.scale must be positive.")
        return config

    # @intent:responsibility キー名→CHIP-8キー番号の対応を解析します。未指定なら既定のキーマップを使います。
    def _parse_keymap(self, keymap_data: Any) -> Dict[str, int]:
        if keymap_data is None:
            return dict(DEFAULT_KEYMAP)
        if not isinstance(keymap_data, dict):
            raise ValueError("keymap must be a mapping of key names to key indices.")
        keymap = {}
        for name, value in keymap_data.items():
            key = self._parse_int(value)
            if not 0 <= key <= 0xF:
                raise ValueError(f"Key index out of range for '{name}': {value}")
            keymap[str(name).upper()] = key
        return keymap

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
