# src/chip8_tracer/instructions/base.py
"""
CHIP-8命令の共通定義。

16bitワードのニブル分解(Word)、命令ファミリーのタグ(Op)、
およびデコード結果の不変な命令値(Instruction)を提供します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from chip8_tracer.core.registers import Register


# @intent:responsibility 16bitワードを慣例的な名前（C, X, Y, N, NN, NNN）のニブルに分解します。
@dataclass(frozen=True)
class Word:
    """
    ビッグエンディアンで格納された2バイトの命令ワード。
    例: 0xD123 -> C=0xD, X=V1, Y=V2, N=0x3, NN=0x23, NNN=0x123
    """
    value: int

    @property
    def c(self) -> int:
        return (self.value >> 12) & 0xF

    @property
    def x(self) -> Register:
        return Register((self.value >> 8) & 0xF)

    @property
    def y(self) -> Register:
        return Register((self.value >> 4) & 0xF)

    @property
    def n(self) -> int:
        return self.value & 0xF

    @property
    def nn(self) -> int:
        return self.value & 0xFF

    @property
    def nnn(self) -> int:
        return self.value & 0xFFF


# @intent:responsibility デコードされた命令ファミリーのタグを定義します。
class Op(Enum):
    UNIMPLEMENTED = "UNIMPLEMENTED"
    END_PROGRAM = "END_PROGRAM"                      # 0000
    CLEAR_SCREEN = "CLEAR_SCREEN"                    # 00E0
    RETURN_SUBROUTINE = "RETURN_SUBROUTINE"          # 00EE
    GOTO = "GOTO"                                    # 1NNN
    CALL_SUBROUTINE = "CALL_SUBROUTINE"              # 2NNN
    SKIP_IF_VALUE_EQ = "SKIP_IF_VALUE_EQ"            # 3XNN
    SKIP_IF_VALUE_NE = "SKIP_IF_VALUE_NE"            # 4XNN
    SKIP_IF_REGISTERS_EQ = "SKIP_IF_REGISTERS_EQ"    # 5XY0
    REGISTER_VALUE_STORE = "REGISTER_VALUE_STORE"    # 6XNN
    REGISTER_VALUE_ADD = "REGISTER_VALUE_ADD"        # 7XNN
    REGISTERS_COPY = "REGISTERS_COPY"                # 8XY0
    REGISTERS_OR = "REGISTERS_OR"                    # 8XY1
    REGISTERS_AND = "REGISTERS_AND"                  # 8XY2
    REGISTERS_XOR = "REGISTERS_XOR"                  # 8XY3
    REGISTERS_ADD = "REGISTERS_ADD"                  # 8XY4
    REGISTERS_SUB = "REGISTERS_SUB"                  # 8XY5
    REGISTERS_SHIFT_RIGHT = "REGISTERS_SHIFT_RIGHT"  # 8XY6
    REGISTERS_SUB_REVERSED = "REGISTERS_SUB_REVERSED"  # 8XY7
    REGISTERS_SHIFT_LEFT = "REGISTERS_SHIFT_LEFT"    # 8XYE
    SKIP_IF_REGISTERS_NE = "SKIP_IF_REGISTERS_NE"    # 9XY0
    I_STORE_ADDRESS = "I_STORE_ADDRESS"              # ANNN
    GOTO_OFFSET = "GOTO_OFFSET"                      # BNNN
    STORE_RANDOM = "STORE_RANDOM"                    # CXNN
    DRAW_SPRITE = "DRAW_SPRITE"                      # DXYN
    SKIP_IF_KEY_ON = "SKIP_IF_KEY_ON"                # EX9E
    SKIP_IF_KEY_OFF = "SKIP_IF_KEY_OFF"              # EXA1
    DELAY_TIMER_TO_REGISTER = "DELAY_TIMER_TO_REGISTER"  # FX07
    WAIT_FOR_KEY = "WAIT_FOR_KEY"                    # FX0A
    REGISTER_TO_DELAY_TIMER = "REGISTER_TO_DELAY_TIMER"  # FX15
    REGISTER_TO_SOUND_TIMER = "REGISTER_TO_SOUND_TIMER"  # FX18
    I_ADD_OFFSET = "I_ADD_OFFSET"                    # FX1E
    I_STORE_DIGIT_ADDRESS = "I_STORE_DIGIT_ADDRESS"  # FX29
    STORE_BCD = "STORE_BCD"                          # FX33
    REGISTERS_DUMP = "REGISTERS_DUMP"                # FX55
    REGISTERS_LOAD = "REGISTERS_LOAD"                # FX65


# @intent:map 逆アセンブル表示用のニーモニックとオペランドの並び。
# オペランドのトークン: "x", "y" はレジスタ、"nn" は8bit即値、"n" は4bit即値、
# "addr" は12bitアドレス、"opcode" は生の16bitワード。それ以外はリテラル。
_SYNTAX: Dict[Op, Tuple[str, Tuple[str, ...]]] = {
    Op.UNIMPLEMENTED: ("DW", ("opcode",)),
    Op.END_PROGRAM: ("END", ()),
    Op.CLEAR_SCREEN: ("CLS", ()),
    Op.RETURN_SUBROUTINE: ("RET", ()),
    Op.GOTO: ("JP", ("addr",)),
    Op.CALL_SUBROUTINE: ("CALL", ("addr",)),
    Op.SKIP_IF_VALUE_EQ: ("SE", ("x", "nn")),
    Op.SKIP_IF_VALUE_NE: ("SNE", ("x", "nn")),
    Op.SKIP_IF_REGISTERS_EQ: ("SE", ("x", "y")),
    Op.REGISTER_VALUE_STORE: ("LD", ("x", "nn")),
    Op.REGISTER_VALUE_ADD: ("ADD", ("x", "nn")),
    Op.REGISTERS_COPY: ("LD", ("x", "y")),
    Op.REGISTERS_OR: ("OR", ("x", "y")),
    Op.REGISTERS_AND: ("AND", ("x", "y")),
    Op.REGISTERS_XOR: ("XOR", ("x", "y")),
    Op.REGISTERS_ADD: ("ADD", ("x", "y")),
    Op.REGISTERS_SUB: ("SUB", ("x", "y")),
    Op.REGISTERS_SHIFT_RIGHT: ("SHR", ("x", "y")),
    Op.REGISTERS_SUB_REVERSED: ("SUBN", ("x", "y")),
    Op.REGISTERS_SHIFT_LEFT: ("SHL", ("x", "y")),
    Op.SKIP_IF_REGISTERS_NE: ("SNE", ("x", "y")),
    Op.I_STORE_ADDRESS: ("LD", ("I", "addr")),
    Op.GOTO_OFFSET: ("JP", ("V0", "addr")),
    Op.STORE_RANDOM: ("RND", ("x", "nn")),
    Op.DRAW_SPRITE: ("DRW", ("x", "y", "n")),
    Op.SKIP_IF_KEY_ON: ("SKP", ("x",)),
    Op.SKIP_IF_KEY_OFF: ("SKNP", ("x",)),
    Op.DELAY_TIMER_TO_REGISTER: ("LD", ("x", "DT")),
    Op.WAIT_FOR_KEY: ("LD", ("x", "K")),
    Op.REGISTER_TO_DELAY_TIMER: ("LD", ("DT", "x")),
    Op.REGISTER_TO_SOUND_TIMER: ("LD", ("ST", "x")),
    Op.I_ADD_OFFSET: ("ADD", ("I", "x")),
    Op.I_STORE_DIGIT_ADDRESS: ("LD", ("F", "x")),
    Op.STORE_BCD: ("LD", ("B", "x")),
    Op.REGISTERS_DUMP: ("LD", ("[I]", "x")),
    Op.REGISTERS_LOAD: ("LD", ("x", "[I]")),
}


# @intent:responsibility デコード済みの不変な命令値を表します。
# @intent:rationale 命令セットは固定かつ有限なので、タグ(Op)と任意のオペランド欄を持つ単一のデータクラスで直和型を表現します。
@dataclass(frozen=True)
class Instruction:
    """
    デコード済みの命令。

    op: 命令ファミリー
    x, y: レジスタオペランド
    value: 8bit即値(NN)、またはスプライト高さ(N)
    address: 12bitアドレス(NNN)
    opcode: UNIMPLEMENTEDの場合のみ、生の16bitワード
    """
    op: Op
    x: Optional[Register] = None
    y: Optional[Register] = None
    value: Optional[int] = None
    address: Optional[int] = None
    opcode: Optional[int] = None

    @property
    def mnemonic(self) -> str:
        return _SYNTAX[self.op][0]

    # @intent:responsibility 表示用のオペランド文字列のリストを生成します。
    def operands(self) -> List[str]:
        rendered = []
        for token in _SYNTAX[self.op][1]:
            if token == "x":
                rendered.append(str(self.x))
            elif token == "y":
                rendered.append(str(self.y))
            elif token == "nn":
                rendered.append(f"0x{self.value:02X}")
            elif token == "n":
                rendered.append(str(self.value))
            elif token == "addr":
                rendered.append(f"0x{self.address:03X}")
            elif token == "opcode":
                rendered.append(f"0x{self.opcode:04X}")
            else:
                rendered.append(token)
        return rendered

    def __str__(self) -> str:
        operands = self.operands()
        if operands:
            return f"{self.mnemonic} {', '.join(operands)}"
        return self.mnemonic
