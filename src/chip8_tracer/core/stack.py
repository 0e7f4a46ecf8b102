# chip8_tracer/core/stack.py
"""
Core Layer (コールスタック)

サブルーチン呼び出しの戻りアドレスを保持する、容量16の固定長スタックです。
"""
from typing import List

from chip8_tracer.common.errors import StackOverflowFault, StackUnderflowFault

MAX_DEPTH = 16


# @intent:responsibility 戻りアドレスのLIFOを管理します。
# @intent:rationale 実機のハードウェアスタックは有限であり、溢れやアンダーフローからは回復できないため致命的フォールトとします。
class CallStack:
    def __init__(self):
        self._elements: List[int] = []

    def push(self, address: int) -> None:
        if len(self._elements) >= MAX_DEPTH:
            raise StackOverflowFault(f"Max stack size of {MAX_DEPTH} reached (pushing {address:#05x}).")
        self._elements.append(address)

    def pop(self) -> int:
        if not self._elements:
            raise StackUnderflowFault("Attempt to pop from empty stack.")
        return self._elements.pop()

    # @intent:responsibility 現在のスタックの深さ（スタックポインタ）を返します。
    @property
    def depth(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    # @intent:responsibility UI表示用に、底から順に積まれたアドレスのコピーを返します。
    def frames(self) -> List[int]:
        return list(self._elements)
