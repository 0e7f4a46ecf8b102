# src/chip8_tracer/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックをそのまま再利用します。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.instructions import decode_word
from chip8_tracer.transport.memory import Memory

WORD_LENGTH = 2

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリをワード単位で逆アセンブルします。
    範囲の末尾に1バイトだけ残る場合、そのバイトはデコードしません。

    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, memory.get_size())
    current_addr = start_addr

    while current_addr + WORD_LENGTH <= end_addr:
        value = memory.read_word(current_addr)
        instruction = decode_word(value)
        result.append((current_addr, f"{value:04X}", str(instruction)))
        current_addr += WORD_LENGTH

    return result
