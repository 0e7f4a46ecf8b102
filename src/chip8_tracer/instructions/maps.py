"""
ワードと命令実装のマッピング定義。
"""
from .base import Op
from . import alu
from . import control
from . import load
from . import video

# @intent:map 上位ニブル(C)からファミリーのデコード関数へのマッピングテーブル。
# 0x0, 0x8, 0xE, 0xF の各ファミリーは、デコード関数の内部でさらに N / NN / NNN により分岐する。
DECODE_MAP = {
    0x0: control.decode_system,
    0x1: control.decode_goto,
    0x2: control.decode_call,
    0x3: control.decode_skip_if_value_eq,
    0x4: control.decode_skip_if_value_ne,
    0x5: control.decode_skip_if_registers_eq,
    0x6: load.decode_value_store,
    0x7: alu.decode_value_add,
    0x8: alu.decode_register_op,
    0x9: control.decode_skip_if_registers_ne,
    0xA: load.decode_i_store_address,
    0xB: control.decode_goto_offset,
    0xC: alu.decode_store_random,
    0xD: video.decode_draw_sprite,
    0xE: control.decode_key_skip,
    0xF: load.decode_misc,
}

# @intent:map 命令ファミリー(Op)から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Op.UNIMPLEMENTED: control.execute_unimplemented,
    Op.END_PROGRAM: control.execute_end_program,
    Op.RETURN_SUBROUTINE: control.execute_return,
    Op.GOTO: control.execute_goto,
    Op.CALL_SUBROUTINE: control.execute_call,
    Op.SKIP_IF_VALUE_EQ: control.execute_skip_if_value_eq,
    Op.SKIP_IF_VALUE_NE: control.execute_skip_if_value_ne,
    Op.SKIP_IF_REGISTERS_EQ: control.execute_skip_if_registers_eq,
    Op.SKIP_IF_REGISTERS_NE: control.execute_skip_if_registers_ne,
    Op.GOTO_OFFSET: control.execute_goto_offset,
    Op.SKIP_IF_KEY_ON: control.execute_skip_if_key_on,
    Op.SKIP_IF_KEY_OFF: control.execute_skip_if_key_off,
    Op.WAIT_FOR_KEY: control.execute_wait_for_key,

    # ALU
    Op.REGISTER_VALUE_ADD: alu.execute_value_add,
    Op.REGISTERS_COPY: alu.execute_copy,
    Op.REGISTERS_OR: alu.execute_or,
    Op.REGISTERS_AND: alu.execute_and,
    Op.REGISTERS_XOR: alu.execute_xor,
    Op.REGISTERS_ADD: alu.execute_add,
    Op.REGISTERS_SUB: alu.execute_sub,
    Op.REGISTERS_SHIFT_RIGHT: alu.execute_shift_right,
    Op.REGISTERS_SUB_REVERSED: alu.execute_sub_reversed,
    Op.REGISTERS_SHIFT_LEFT: alu.execute_shift_left,
    Op.STORE_RANDOM: alu.execute_store_random,

    # Load/Store
    Op.REGISTER_VALUE_STORE: load.execute_value_store,
    Op.I_STORE_ADDRESS: load.execute_i_store_address,
    Op.DELAY_TIMER_TO_REGISTER: load.execute_delay_timer_to_register,
    Op.REGISTER_TO_DELAY_TIMER: load.execute_register_to_delay_timer,
    Op.REGISTER_TO_SOUND_TIMER: load.execute_register_to_sound_timer,
    Op.I_ADD_OFFSET: load.execute_i_add_offset,
    Op.I_STORE_DIGIT_ADDRESS: load.execute_i_store_digit_address,
    Op.STORE_BCD: load.execute_store_bcd,
    Op.REGISTERS_DUMP: load.execute_registers_dump,
    Op.REGISTERS_LOAD: load.execute_registers_load,

    # Video
    Op.CLEAR_SCREEN: video.execute_clear_screen,
    Op.DRAW_SPRITE: video.execute_draw_sprite,
}
