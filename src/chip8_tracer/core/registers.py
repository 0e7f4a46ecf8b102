# chip8_tracer/core/registers.py
"""
Core Layer (レジスタファイル)

16本の8bit汎用レジスタ(V0-VF)、16bitのインデックスレジスタI、プログラムカウンタを保持します。
VFはキャリー/ボロー/衝突フラグを兼ねますが、通常の命令から明示的に書き込むこともできます。
汎用レジスタの値は算術演算で常に256を法としてラップします。
"""
from dataclasses import dataclass

from chip8_tracer.common.errors import InvalidRegisterFault
from chip8_tracer.transport.memory import OFFSET_PROGRAM

GENERAL_REGISTER_COUNT = 16
FLAG_REGISTER_INDEX = 0xF


# @intent:responsibility 検証済みの汎用レジスタ番号(0-15)を表す不変の値オブジェクトです。
@dataclass(frozen=True)
class Register:
    index: int

    # @intent:pre-condition indexは0-15の範囲である必要があります。
    # @intent:rationale デコーダからは4bitしか渡らないため、範囲外は内部不変条件の破れとみなします。
    def __post_init__(self):
        if not 0 <= self.index < GENERAL_REGISTER_COUNT:
            raise InvalidRegisterFault(f"Attempt to access non-existent general register {self.index}.")

    def __str__(self) -> str:
        return f"V{self.index:X}"


V0 = Register(0)
VF = Register(FLAG_REGISTER_INDEX)


# @intent:responsibility 汎用レジスタ、インデックスレジスタ、PCの状態と、レジスタ間演算を提供します。
class RegisterFile:
    """
    CHIP-8のレジスタファイル。
    演算系メソッドはフラグ(VF)を先に書き、結果を後に書きます。
    したがって結果の格納先がVF自身の場合、VFには演算結果が残ります。
    """
    def __init__(self):
        self._general = bytearray(GENERAL_REGISTER_COUNT)
        self.index: int = 0x000
        self.program_counter: int = OFFSET_PROGRAM

    def get_value(self, register: Register) -> int:
        return self._general[register.index]

    # @intent:pre-condition valueは8bit値である必要があります。
    def set_value(self, register: Register, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value {value} is not an 8-bit value.")
        self._general[register.index] = value

    def set_flag(self, enable: bool) -> None:
        self._general[FLAG_REGISTER_INDEX] = 1 if enable else 0

    # @intent:responsibility 即値を加算します（フラグは変化しません）。
    def add_value(self, register: Register, value: int) -> None:
        self.set_value(register, (self.get_value(register) + value) & 0xFF)

    def copy_registers(self, to: Register, source: Register) -> None:
        self.set_value(to, self.get_value(source))

    def or_registers(self, to: Register, source: Register) -> None:
        self.set_value(to, self.get_value(to) | self.get_value(source))

    def and_registers(self, to: Register, source: Register) -> None:
        self.set_value(to, self.get_value(to) & self.get_value(source))

    def xor_registers(self, to: Register, source: Register) -> None:
        self.set_value(to, self.get_value(to) ^ self.get_value(source))

    # @intent:responsibility to := to + source。和が255を超えた場合VF=1。
    def add_registers(self, to: Register, source: Register) -> None:
        total = self.get_value(to) + self.get_value(source)
        self.set_flag(total > 0xFF)
        self.set_value(to, total & 0xFF)

    # @intent:responsibility to := to - source。ボローが発生しなかった場合VF=1（加算とは極性が逆）。
    def sub_registers(self, to: Register, source: Register) -> None:
        to_val = self.get_value(to)
        source_val = self.get_value(source)
        self.set_flag(to_val >= source_val)
        self.set_value(to, (to_val - source_val) & 0xFF)

    # @intent:responsibility to := source - to。ボローが発生しなかった場合VF=1。
    def sub_registers_reversed(self, to: Register, source: Register) -> None:
        to_val = self.get_value(to)
        source_val = self.get_value(source)
        self.set_flag(source_val >= to_val)
        self.set_value(to, (source_val - to_val) & 0xFF)

    # @intent:responsibility 右シフト。VFにはシフトアウトされた最下位ビットが入ります。
    # @intent:rationale lazy_shift有効時は to 自身を、無効時は source を読み出し元とします。
    def shr_registers(self, to: Register, source: Register, lazy_shift: bool) -> None:
        value = self.get_value(to if lazy_shift else source)
        self.set_flag((value & 0x01) != 0)
        self.set_value(to, value >> 1)

    # @intent:responsibility 左シフト。VFにはシフトアウトされた最上位ビットが入ります。
    def shl_registers(self, to: Register, source: Register, lazy_shift: bool) -> None:
        value = self.get_value(to if lazy_shift else source)
        self.set_flag((value & 0x80) != 0)
        self.set_value(to, (value << 1) & 0xFF)

    # @intent:responsibility V0からmax_registerまで（両端含む）の値を返します。
    def dump(self, max_register: Register) -> bytes:
        return bytes(self._general[:max_register.index + 1])

    # @intent:responsibility バイト列をV0から順に読み込みます。
    def load(self, values: bytes) -> None:
        if len(values) > GENERAL_REGISTER_COUNT:
            raise InvalidRegisterFault(f"Cannot load {len(values)} values into {GENERAL_REGISTER_COUNT} registers.")
        self._general[:len(values)] = values

    # @intent:responsibility インデックスレジスタに加算します。Iは16bitでラップします。
    def advance_index(self, amount: int) -> None:
        self.index = (self.index + amount) & 0xFFFF
