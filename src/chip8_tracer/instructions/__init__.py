"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.common.errors import DecodeFault
from chip8_tracer.core.state import Chip8System, StepContext
from chip8_tracer.transport.memory import Memory
from .base import Instruction, Op, Word
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility 16bitワードを命令値に分類します。
# @intent:rationale 純粋関数です。未知の組み合わせは失敗せず、生のオペコードを持つUNIMPLEMENTEDになります。
def decode_word(value: int) -> Instruction:
    """
    16bitワードをデコードし、Instructionを返します。
    16bitに収まらない値は到達不能な分岐とみなし、DecodeFaultを発生させます。
    """
    if not 0 <= value <= 0xFFFF:
        raise DecodeFault(f"Word {value:#x} is not a 16-bit value.")
    word = Word(value)
    decoder = DECODE_MAP.get(word.c)
    if decoder is None:
        raise DecodeFault(f"No decoder for instruction family {word.c:#x}.")
    return decoder(word)

# @intent:responsibility メモリ上の指定オフセットからワードを読み、デコードします。
# @intent:pre-condition offset + 1 がメモリ範囲内である必要があります（違反時はMemoryAccessFault）。
def decode_instruction(memory: Memory, offset: int) -> Instruction:
    return decode_word(memory.read_word(offset))

# @intent:responsibility デコードされた命令を実行し、システムの状態とステップコンテキストを更新します。
def execute_instruction(ins: Instruction, system: Chip8System, ctx: StepContext) -> None:
    executor = EXECUTE_MAP.get(ins.op)
    if executor is None:
        raise DecodeFault(f"No executor for instruction {ins.op.name}.")
    executor(system, ctx, ins)
