# src/chip8_tracer/instructions/control.py
"""
制御命令（分岐、ジャンプ、サブルーチン、スキップ、キー入力待ち）の実装。
"""
import logging

from chip8_tracer.core.registers import V0
from chip8_tracer.core.state import Chip8System, StepContext
from .base import Instruction, Op, Word

logger = logging.getLogger(__name__)

SKIP_LENGTH = 4

# @intent:map 0x0ファミリーのNNNから命令へのマッピング。
# 0x0DEは正規の終了命令ではないため、ここには含めず未実装として扱う。
SYSTEM_OPS = {
    0x000: Op.END_PROGRAM,
    0x0E0: Op.CLEAR_SCREEN,
    0x0EE: Op.RETURN_SUBROUTINE,
}

# @intent:map 0xEファミリーのNNから命令へのマッピング。
KEY_OPS = {
    0x9E: Op.SKIP_IF_KEY_ON,
    0xA1: Op.SKIP_IF_KEY_OFF,
}


# --- Decode ---

# @intent:responsibility 0NNN (システム命令) をデコードします。
def decode_system(word: Word) -> Instruction:
    op = SYSTEM_OPS.get(word.nnn)
    if op is None:
        return Instruction(Op.UNIMPLEMENTED, opcode=word.value)
    return Instruction(op)

def decode_goto(word: Word) -> Instruction:
    return Instruction(Op.GOTO, address=word.nnn)

def decode_call(word: Word) -> Instruction:
    return Instruction(Op.CALL_SUBROUTINE, address=word.nnn)

def decode_skip_if_value_eq(word: Word) -> Instruction:
    return Instruction(Op.SKIP_IF_VALUE_EQ, x=word.x, value=word.nn)

def decode_skip_if_value_ne(word: Word) -> Instruction:
    return Instruction(Op.SKIP_IF_VALUE_NE, x=word.x, value=word.nn)

# @intent:responsibility 5XY? をデコードします。下位ニブルは参照しません。
def decode_skip_if_registers_eq(word: Word) -> Instruction:
    return Instruction(Op.SKIP_IF_REGISTERS_EQ, x=word.x, y=word.y)

def decode_skip_if_registers_ne(word: Word) -> Instruction:
    return Instruction(Op.SKIP_IF_REGISTERS_NE, x=word.x, y=word.y)

def decode_goto_offset(word: Word) -> Instruction:
    return Instruction(Op.GOTO_OFFSET, address=word.nnn)

# @intent:responsibility EXNN (キースキップ命令) をデコードします。
def decode_key_skip(word: Word) -> Instruction:
    op = KEY_OPS.get(word.nn)
    if op is None:
        return Instruction(Op.UNIMPLEMENTED, opcode=word.value)
    return Instruction(op, x=word.x)


# --- Execute ---

# @intent:responsibility 未知のオペコードを警告として報告します。状態は変更しません。
def execute_unimplemented(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    logger.warning("Unimplemented instruction detected: %#06x", ins.opcode)

# @intent:responsibility プログラム終了命令。PCを据え置き、停止を要求します。
def execute_end_program(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    ctx.pause = True

# @intent:responsibility サブルーチンから戻ります。呼び出し命令の次のワードへ復帰します。
def execute_return(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    ctx.pc = system.stack.pop() + 2

# @intent:responsibility 自分のアドレスへの分岐は停止イディオムとして扱います。
def _jump(ctx: StepContext, target: int) -> None:
    if target == ctx.pc:
        ctx.pause = True
    else:
        ctx.pc = target

def execute_goto(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _jump(ctx, ins.address)

# @intent:responsibility 呼び出し元のアドレス（この命令自身）をプッシュしてから分岐します。
def execute_call(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.stack.push(ctx.pc)
    ctx.pc = ins.address

# @intent:responsibility NNN + V0 へ分岐します。
def execute_goto_offset(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _jump(ctx, ins.address + system.registers.get_value(V0))

def _skip_if(ctx: StepContext, condition: bool) -> None:
    if condition:
        ctx.pc += SKIP_LENGTH

def execute_skip_if_value_eq(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _skip_if(ctx, system.registers.get_value(ins.x) == ins.value)

def execute_skip_if_value_ne(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _skip_if(ctx, system.registers.get_value(ins.x) != ins.value)

def execute_skip_if_registers_eq(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    _skip_if(ctx, regs.get_value(ins.x) == regs.get_value(ins.y))

def execute_skip_if_registers_ne(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    _skip_if(ctx, regs.get_value(ins.x) != regs.get_value(ins.y))

def execute_skip_if_key_on(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _skip_if(ctx, system.registers.get_value(ins.x) in ctx.keys)

def execute_skip_if_key_off(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    _skip_if(ctx, system.registers.get_value(ins.x) not in ctx.keys)

# @intent:responsibility キー入力待ち。押下が無ければ同じ命令を繰り返します。
# @intent:rationale ブロッキング呼び出しではなく、進捗の無いステップとして表現します。呼び出し側が再度stepする必要があります。
def execute_wait_for_key(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    if not ctx.keys:
        ctx.pause = True
        return
    system.registers.set_value(ins.x, min(ctx.keys))
