from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_tracer.common.types import Rgba
from chip8_tracer.transport.framebuffer import COLOR_OFF, COLOR_ON

# @intent:constant 既定のキー配置（Qtのキー名 -> CHIP-8キーコード）。
# 左上の4x4ブロック (1234 / QWER / ASDF / ZXCV) をCOSMAC VIPの16進キーパッドに対応させる。
DEFAULT_KEYMAP: Dict[str, int] = {
    "X": 0x0,
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "Q": 0x4,
    "W": 0x5,
    "E": 0x6,
    "A": 0x7,
    "S": 0x8,
    "D": 0x9,
    "Z": 0xA,
    "C": 0xB,
    "4": 0xC,
    "R": 0xD,
    "F": 0xE,
    "V": 0xF,
}

@dataclass
class DisplayColors:
    on: Rgba = COLOR_ON
    off: Rgba = COLOR_OFF

@dataclass
class EmulatorConfig:
    quirks: bool = False
    step_rate: int = 480   # steps per second
    frame_rate: int = 60   # repaints per second
    scale: int = 10
    seed: Optional[int] = None
    log_level: str = "WARNING"
    colors: DisplayColors = field(default_factory=DisplayColors)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))

    # @intent:responsibility 1フレーム（再描画1回）あたりに実行するステップ数を返します。
    @property
    def steps_per_frame(self) -> int:
        return max(1, round(self.step_rate / self.frame_rate))
