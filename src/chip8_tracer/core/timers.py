# chip8_tracer/core/timers.py
"""
Core Layer (タイマー)

ディレイタイマーとサウンドタイマーの2つの8bitカウンタを保持します。
エンジンのステップ毎ではなく、TICK_INTERVALステップに1回だけ減衰します
（480Hzのステップに対して約60Hzの減衰）。
"""
from dataclasses import dataclass, field

TICK_INTERVAL = 8


# @intent:responsibility 2つのカウントダウンタイマーと減衰の分周を管理します。
@dataclass
class Timers:
    delay: int = 0
    sound: int = 0
    _steps_until_decay: int = field(default=TICK_INTERVAL, init=False, repr=False)

    # @intent:responsibility 1ステップ分進め、分周カウンタが尽きたら両タイマーを1減らします。
    # @intent:post-condition タイマー値は0未満にはなりません。
    def tick(self) -> None:
        self._steps_until_decay -= 1
        if self._steps_until_decay > 0:
            return

        self._steps_until_decay = TICK_INTERVAL
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self) -> bool:
        return self.sound > 0
