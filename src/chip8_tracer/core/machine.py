# chip8_tracer/core/machine.py
"""
Core Layer (実行エンジン)

このモジュールは、CHIP-8マシンのフェッチ・デコード・実行・タイマー更新のサイクルを駆動します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
import random
from typing import Dict, Iterable, List, Optional

from chip8_tracer import disassembler
from chip8_tracer.common.types import DisassemblyLine, KeySet, Rgba
from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.registers import GENERAL_REGISTER_COUNT, Register, RegisterFile
from chip8_tracer.core.stack import CallStack
from chip8_tracer.core.state import Chip8System, StepContext
from chip8_tracer.core.timers import Timers
from chip8_tracer.instructions import Instruction, decode_instruction, execute_instruction
from chip8_tracer.transport.framebuffer import Framebuffer
from chip8_tracer.transport.memory import Memory

logger = logging.getLogger(__name__)

KEY_COUNT = 16
WORD_LENGTH = 2


# @intent:responsibility 押下キーの集まりを検証し、順序と重複を取り除いた集合に正規化します。
# @intent:pre-condition 各キーコードは0-15である必要があります。
def normalize_keys(keys_pressed: Iterable[int]) -> KeySet:
    keys = frozenset(keys_pressed)
    for key in keys:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key code {key} is outside the 0-{KEY_COUNT - 1} range.")
    return keys


# @intent:responsibility CHIP-8マシン全体を所有し、1命令単位で状態を進めます。
class Machine:
    """
    CHIP-8仮想マシン。

    メモリ、レジスタファイル、コールスタック、タイマー、フレームバッファは生成時にまとめて作られ、
    step() によってのみ変更されます。マシンは単一スレッドからのみ操作される前提です。
    """
    # @intent:responsibility プログラムイメージとクワーク設定からマシンを構築します。
    # @intent:pre-condition programはプログラム領域(3584バイト)に収まる必要があります。
    def __init__(self, program: bytes, quirks: Optional[Quirks] = None, rng: Optional[random.Random] = None):
        self._system = Chip8System(
            memory=Memory(bytes(program)),
            quirks=quirks if quirks is not None else Quirks.inactive(),
            rng=rng if rng is not None else random.Random(),
        )
        self._paused: bool = False
        self._cycle_count: int = 0
        logger.debug(
            "Machine created: %d program bytes, quirks %s", len(program), self._system.quirks
        )

    # @intent:responsibility マシンを1命令サイクル進めます。
    # @intent:flow デコード -> 実行 -> タイマー更新 -> PC更新 の順序で処理を行います。
    def step(self, keys_pressed: Iterable[int] = ()) -> None:
        """
        押下中のキーコード（0-15、順不同、重複可）を受け取り、ちょうど1命令を実行します。
        戻り値はありません。結果はマシンが所有するコンポーネントの状態にのみ現れます。
        """
        keys = normalize_keys(keys_pressed)
        initial_pc = self._system.registers.program_counter

        instruction = self._decode(initial_pc)
        ctx = StepContext(pc=initial_pc, keys=keys)
        self._execute(instruction, ctx)

        # タイマーはどの命令を実行したかに関わらず、ちょうど1回だけ進める
        self._system.timers.tick()

        self._update_pc(initial_pc, ctx)
        self._cycle_count += 1

    def _decode(self, pc: int) -> Instruction:
        return decode_instruction(self._system.memory, pc)

    def _execute(self, instruction: Instruction, ctx: StepContext) -> None:
        execute_instruction(instruction, self._system, ctx)

    # @intent:responsibility 命令実行後のPC更新を行います。
    # @intent:rationale 停止要求があればPCを据え置き、命令がPCを動かしていなければ1ワード進めます。
    #                  ジャンプ・コール・リターン・スキップはPCを自ら設定するため、既定の+2の対象外です。
    def _update_pc(self, initial_pc: int, ctx: StepContext) -> None:
        if ctx.pause:
            if not self._paused:
                logger.debug("Machine paused at %#05x", initial_pc)
            self._paused = True
            return

        self._paused = False
        next_pc = ctx.pc
        if next_pc == initial_pc:
            next_pc += WORD_LENGTH
        self._system.registers.program_counter = next_pc

    # @intent:responsibility フレームバッファの内容を表示用のRGBAバイト列として返します。
    def draw(self, on: Optional[Rgba] = None, off: Optional[Rgba] = None) -> bytes:
        """
        行優先（左→右、上→下）のピクセル毎RGBA 4バイトの並びを返します。
        状態は変更しません。ステップと並行して呼び出してはいけません。
        """
        return self._system.framebuffer.to_rgba(on, off)

    # --- インスペクタ向けAPI ---

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def sound_active(self) -> bool:
        return self._system.timers.sound_active

    @property
    def program_counter(self) -> int:
        return self._system.registers.program_counter

    @property
    def quirks(self) -> Quirks:
        return self._system.quirks

    @property
    def memory(self) -> Memory:
        return self._system.memory

    @property
    def registers(self) -> RegisterFile:
        return self._system.registers

    @property
    def stack(self) -> CallStack:
        return self._system.stack

    @property
    def timers(self) -> Timers:
        return self._system.timers

    @property
    def framebuffer(self) -> Framebuffer:
        return self._system.framebuffer

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        regs = self._system.registers
        register_map = {
            f"V{i:X}": regs.get_value(Register(i)) for i in range(GENERAL_REGISTER_COUNT)
        }
        register_map.update({
            "I": regs.index,
            "PC": regs.program_counter,
            "SP": self._system.stack.depth,
            "DT": self._system.timers.delay,
            "ST": self._system.timers.sound,
        })
        return register_map

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._system.memory, start_addr, length)
