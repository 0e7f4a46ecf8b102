"""
キーボード割り当てモジュール。

設定ファイルのキー名（"X", "1" など）をQtのキーコードに解決し、
キーイベントから現在押下中のCHIP-8キーコード集合を組み立てます。
"""
from typing import Dict, Set

from PySide6.QtCore import Qt

from chip8_tracer.common.types import KeySet


# @intent:utility_function Qt.Key（列挙値または整数）を整数のキーコードに変換します。
# @intent:rationale PySide6のバージョンによってQt.Keyが整数互換の場合と列挙型の場合があるため。
def key_code(key) -> int:
    return key.value if hasattr(key, "value") else int(key)


# @intent:utility_function Qt.Keyの "Key_" 名を大文字小文字を区別せずに引ける辞書を作ります。
# @intent:rationale 設定ローダーはキー名を大文字に正規化するため、"SPACE" から Qt.Key.Key_Space を引けるようにします。
def _qt_key_names() -> Dict[str, object]:
    return {
        name[len("Key_"):].upper(): getattr(Qt.Key, name)
        for name in dir(Qt.Key)
        if name.startswith("Key_")
    }


# @intent:responsibility キー名 -> CHIP-8キーコードの対応を、Qtキーコード -> CHIP-8キーコードに解決します。
def resolve_keymap(keymap: Dict[str, int]) -> Dict[int, int]:
    qt_keys = _qt_key_names()
    resolved = {}
    for name, code in keymap.items():
        qt_key = qt_keys.get(str(name).upper())
        if qt_key is None:
            raise ValueError(f"Unknown key name '{name}' in keymap")
        resolved[key_code(qt_key)] = code
    return resolved


# @intent:responsibility 押下中のキーを追跡し、ステップ毎の入力集合を提供します。
class KeyState:
    def __init__(self, keymap: Dict[str, int]):
        self._mapping = resolve_keymap(keymap)
        self._held: Set[int] = set()

    # @intent:responsibility キー押下を記録します。割り当てのあるキーであればTrueを返します。
    def press(self, qt_key) -> bool:
        code = self._mapping.get(key_code(qt_key))
        if code is None:
            return False
        self._held.add(code)
        return True

    def release(self, qt_key) -> bool:
        code = self._mapping.get(key_code(qt_key))
        if code is None:
            return False
        self._held.discard(code)
        return True

    # ウィンドウがフォーカスを失った場合など
    def release_all(self) -> None:
        self._held.clear()

    def pressed(self) -> KeySet:
        return frozenset(self._held)
