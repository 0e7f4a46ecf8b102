"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスを定義します。
"""
from typing import FrozenSet, Tuple

# @intent:data_structure 1ステップ中に押下されているキーコード(0-15)の集合。
# Machine, UIなど複数のレイヤーで共通して使用されます。
KeySet = FrozenSet[int]

# @intent:data_structure RGBA各8bitの色定義。
Rgba = Tuple[int, int, int, int]

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_word, mnemonic)。
DisassemblyLine = Tuple[int, str, str]
