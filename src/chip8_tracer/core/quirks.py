# chip8_tracer/core/quirks.py
"""
互換性クワーク（Quirks）の設定。

歴史的に分岐した実装向けに書かれたプログラムを動かすため、一部のオペコードの挙動を切り替えます。
"""
from dataclasses import dataclass


# @intent:responsibility 2つのクワークの有効/無効を保持する不変の設定です。
@dataclass(frozen=True)
class Quirks:
    """
    lazy_shift: 8XY6/8XYE がVYではなくVX自身をシフトする。
    static_dump_index: FX55/FX65 の後にIを進めない。
    """
    lazy_shift: bool = False
    static_dump_index: bool = False

    # @intent:responsibility 単一のオン/オフトグルから両クワークを同時に設定します。
    @classmethod
    def from_flag(cls, is_active: bool) -> "Quirks":
        return cls.active() if is_active else cls.inactive()

    @classmethod
    def active(cls) -> "Quirks":
        return cls(lazy_shift=True, static_dump_index=True)

    @classmethod
    def inactive(cls) -> "Quirks":
        return cls(lazy_shift=False, static_dump_index=False)

    @property
    def is_active(self) -> bool:
        return self.lazy_shift and self.static_dump_index
