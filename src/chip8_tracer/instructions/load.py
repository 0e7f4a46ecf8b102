# src/chip8_tracer/instructions/load.py
"""
転送命令（即値ロード、インデックスレジスタ、タイマー、BCD、レジスタの一括退避/復帰）の実装。
"""
from chip8_tracer.core.state import Chip8System, StepContext
from .base import Instruction, Op, Word

# @intent:map 0xFファミリーのNNから命令へのマッピング。
MISC_OPS = {
    0x07: Op.DELAY_TIMER_TO_REGISTER,
    0x0A: Op.WAIT_FOR_KEY,
    0x15: Op.REGISTER_TO_DELAY_TIMER,
    0x18: Op.REGISTER_TO_SOUND_TIMER,
    0x1E: Op.I_ADD_OFFSET,
    0x29: Op.I_STORE_DIGIT_ADDRESS,
    0x33: Op.STORE_BCD,
    0x55: Op.REGISTERS_DUMP,
    0x65: Op.REGISTERS_LOAD,
}


# --- Decode ---

def decode_value_store(word: Word) -> Instruction:
    return Instruction(Op.REGISTER_VALUE_STORE, x=word.x, value=word.nn)

def decode_i_store_address(word: Word) -> Instruction:
    return Instruction(Op.I_STORE_ADDRESS, address=word.nnn)

# @intent:responsibility FXNN (タイマー・インデックス・一括転送など) をデコードします。
def decode_misc(word: Word) -> Instruction:
    op = MISC_OPS.get(word.nn)
    if op is None:
        return Instruction(Op.UNIMPLEMENTED, opcode=word.value)
    return Instruction(op, x=word.x)


# --- Execute ---

def execute_value_store(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.set_value(ins.x, ins.value)

def execute_i_store_address(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.index = ins.address

def execute_delay_timer_to_register(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.set_value(ins.x, system.timers.delay)

def execute_register_to_delay_timer(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.timers.delay = system.registers.get_value(ins.x)

def execute_register_to_sound_timer(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.timers.sound = system.registers.get_value(ins.x)

def execute_i_add_offset(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.registers.advance_index(system.registers.get_value(ins.x))

# @intent:responsibility IをVXの値に対応するグリフの先頭アドレスに設定します。
def execute_i_store_digit_address(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    digit = system.registers.get_value(ins.x)
    system.registers.index = system.memory.glyph_address(digit)

# @intent:responsibility VXの10進表現をI, I+1, I+2に格納します。Iは変化しません。
def execute_store_bcd(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    system.memory.store_bcd(regs.index, regs.get_value(ins.x))

# @intent:responsibility V0..VXをIから始まるメモリに退避します。
# @intent:rationale static_dump_indexクワークが無効の場合のみ、IをX+1進めます。
def execute_registers_dump(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    system.memory.write_bytes(regs.index, regs.dump(ins.x))
    if not system.quirks.static_dump_index:
        regs.advance_index(ins.x.index + 1)

# @intent:responsibility Iから始まるメモリをV0..VXに復帰します。
def execute_registers_load(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    regs.load(system.memory.read_bytes(regs.index, ins.x.index + 1))
    if not system.quirks.static_dump_index:
        regs.advance_index(ins.x.index + 1)
