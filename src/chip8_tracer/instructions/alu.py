# src/chip8_tracer/instructions/alu.py
"""
算術論理演算命令の実装。

フラグ(VF)の極性に注意: 加算はキャリー発生時に1、減算はボローが「発生しなかった」場合に1。
"""
from chip8_tracer.core.state import Chip8System, StepContext
from .base import Instruction, Op, Word

# @intent:map 0x8ファミリーの下位ニブル(N)から命令へのマッピング。
REGISTER_OPS = {
    0x0: Op.REGISTERS_COPY,
    0x1: Op.REGISTERS_OR,
    0x2: Op.REGISTERS_AND,
    0x3: Op.REGISTERS_XOR,
    0x4: Op.REGISTERS_ADD,
    0x5: Op.REGISTERS_SUB,
    0x6: Op.REGISTERS_SHIFT_RIGHT,
    0x7: Op.REGISTERS_SUB_REVERSED,
    0xE: Op.REGISTERS_SHIFT_LEFT,
}


# --- Decode ---

def decode_value_add(word: Word) -> Instruction:
    return Instruction(Op.REGISTER_VALUE_ADD, x=word.x, value=word.nn)

# @intent:responsibility 8XYN (レジスタ間演算) をデコードします。
def decode_register_op(word: Word) -> Instruction:
    op = REGISTER_OPS.get(word.n)
    if op is None:
        return Instruction(Op.UNIMPLEMENTED, opcode=word.value)
    return Instruction(op, x=word.x, y=word.y)

def decode_store_random(word: Word) -> Instruction:
    return Instruction(Op.STORE_RANDOM, x=word.x, value=word.nn)


# --- Execute ---

# @intent:responsibility VX += NN。フラグは変化しません。
def execute_value_add(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.add_value(ins.x, ins.value)

def execute_copy(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.copy_registers(ins.x, ins.y)

def execute_or(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.or_registers(ins.x, ins.y)

def execute_and(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.and_registers(ins.x, ins.y)

def execute_xor(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.xor_registers(ins.x, ins.y)

def execute_add(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.add_registers(ins.x, ins.y)

def execute_sub(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.sub_registers(ins.x, ins.y)

def execute_sub_reversed(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.sub_registers_reversed(ins.x, ins.y)

# @intent:responsibility シフト命令。読み出し元はlazy_shiftクワークに従います。
def execute_shift_right(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.shr_registers(ins.x, ins.y, system.quirks.lazy_shift)

def execute_shift_left(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.shl_registers(ins.x, ins.y, system.quirks.lazy_shift)

# @intent:responsibility VX := 乱数 AND NN。乱数源はシステムに注入されたものを使います。
def execute_store_random(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.set_value(ins.x, system.rng.randrange(0x100) & ins.value)
