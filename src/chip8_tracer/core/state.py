# chip8_tracer/core/state.py
"""
Core Layer (マシン状態)

マシンを構成する全コンポーネントの束(Chip8System)と、
1ステップの実行中だけ存在する作業用コンテキスト(StepContext)を定義します。
"""
import random
from dataclasses import dataclass, field

from chip8_tracer.common.types import KeySet
from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.registers import RegisterFile
from chip8_tracer.core.stack import CallStack
from chip8_tracer.core.timers import Timers
from chip8_tracer.transport.framebuffer import Framebuffer
from chip8_tracer.transport.memory import Memory


# @intent:responsibility マシンが排他的に所有するコンポーネントをまとめて保持します。
# @intent:rationale 命令実行関数はこの束を受け取り、Machineを経由せずに各コンポーネントを更新します。
@dataclass
class Chip8System:
    memory: Memory
    registers: RegisterFile = field(default_factory=RegisterFile)
    stack: CallStack = field(default_factory=CallStack)
    timers: Timers = field(default_factory=Timers)
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    quirks: Quirks = field(default_factory=Quirks.inactive)
    # randrange() を持つ乱数源。テストでは固定列を返すスタブを注入する。
    rng: random.Random = field(default_factory=random.Random)


# @intent:responsibility 1ステップ分の作業用状態（次のPC候補、押下キー、停止要求）を保持します。
@dataclass
class StepContext:
    """
    pc: 命令実行前のPCで初期化され、分岐・スキップ系の命令が書き換えます。
    keys: このステップ中に押下されているキー（読み取り専用）。
    pause: 自己ジャンプ・プログラム終了・キー待ちで立ち、PCを据え置かせます。
    """
    pc: int
    keys: KeySet = frozenset()
    pause: bool = False
