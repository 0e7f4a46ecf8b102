# chip8_tracer/transport/memory.py
"""
Transport Layer (メインメモリ)

このモジュールは、CHIP-8の4096バイトのフラットなアドレス空間を表現します。
低位アドレスにはHEX数字のグリフテーブルが、0x200以降にはロードされたプログラムが配置されます。
範囲外アクセスはラップアラウンドせず、致命的フォールトとして扱います。
"""
from typing import Iterable

from chip8_tracer.common.errors import MemoryAccessFault

MEMORY_SIZE = 4096

# @intent:constant グリフテーブルとプログラム領域の固定オフセット。
OFFSET_FONT = 0x050
OFFSET_PROGRAM = 0x200
PROGRAM_REGION_SIZE = MEMORY_SIZE - OFFSET_PROGRAM

GLYPH_HEIGHT = 5

# @intent:constant 0-Fの各HEX数字を4x5ピクセルで表すグリフ（1行1バイト、上位4bitのみ使用）。
FONT_GLYPHS = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility グリフテーブルを含むCHIP-8のメインメモリを提供します。
class Memory:
    """
    4096バイトのメインメモリ。
    生成時にグリフテーブルを書き込み、プログラムイメージをOFFSET_PROGRAMからコピーします。
    """
    # @intent:responsibility メモリを初期化し、グリフとプログラムを配置します。
    # @intent:pre-condition programはプログラム領域(3584バイト)に収まる必要があります。
    def __init__(self, program: bytes = b""):
        if len(program) > PROGRAM_REGION_SIZE:
            raise MemoryAccessFault(
                f"Program of {len(program)} bytes does not fit the program region "
                f"({PROGRAM_REGION_SIZE} bytes at {OFFSET_PROGRAM:#05x})."
            )
        self._memory = bytearray(MEMORY_SIZE)
        self._memory[OFFSET_FONT:OFFSET_FONT + len(FONT_GLYPHS)] = FONT_GLYPHS
        self._memory[OFFSET_PROGRAM:OFFSET_PROGRAM + len(program)] = program

    # @intent:responsibility アドレス範囲 [address, address + length) が有効かを検証します。
    def _check_range(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > MEMORY_SIZE:
            raise MemoryAccessFault(
                f"Address range {address:#06x}+{length} out of bounds for memory of size {MEMORY_SIZE}."
            )

    def read_byte(self, address: int) -> int:
        self._check_range(address)
        return self._memory[address]

    # @intent:pre-condition dataは8bit値である必要があります。
    def write_byte(self, address: int, data: int) -> None:
        self._check_range(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 指定アドレスからlength バイトを読み出します。
    def read_bytes(self, address: int, length: int) -> bytes:
        """
        address から length バイトの内容を返します。length が 0 の場合は空のバイト列です。
        範囲の一部でもメモリ外にかかる場合はMemoryAccessFaultを発生させます。
        """
        self._check_range(address, length)
        return bytes(self._memory[address:address + length])

    # @intent:responsibility バイト列を連続したアドレスに書き込みます。
    # @intent:rationale 途中で範囲外になる書き込みで部分的な状態変更を残さないよう、先に全体を検証します。
    def write_bytes(self, address: int, values: Iterable[int]) -> None:
        data = bytes(values)
        self._check_range(address, len(data))
        self._memory[address:address + len(data)] = data

    # @intent:responsibility ビッグエンディアンの16bitワードを読み出します。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit read."""
        self._check_range(address, 2)
        return (self._memory[address] << 8) | self._memory[address + 1]

    # @intent:responsibility valueの10進3桁(BCD)を address, address+1, address+2 に格納します。
    def store_bcd(self, address: int, value: int) -> None:
        self.write_bytes(address, (value // 100, (value // 10) % 10, value % 10))

    # @intent:responsibility 指定されたHEX数字のグリフ先頭アドレスを返します。
    @staticmethod
    def glyph_address(digit: int) -> int:
        return OFFSET_FONT + digit * GLYPH_HEIGHT

    def get_size(self) -> int:
        return MEMORY_SIZE
