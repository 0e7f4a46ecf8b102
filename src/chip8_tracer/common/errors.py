"""
致命的フォールト（Fatal Fault）の例外階層を定義するモジュール。

ここで定義される例外は、エンジン内部の不変条件の破れ、またはアーキテクチャの
ハードリミット（16段のスタック、16本のレジスタ、4096バイトのメモリ）を
超えるプログラムを表します。コア内部では捕捉せず、ホスト側に伝播させます。
"""

# @intent:responsibility 全ての致命的フォールトの基底クラスです。
class MachineFault(Exception):
    """
    回復不能なマシンフォールト。
    発生した時点でマシンの状態は信頼できないため、ホストは実行を中止するべきです。
    """


# @intent:responsibility メモリ範囲外アクセスを表します。
# @intent:rationale 既存のIndexErrorとして捕捉するコードとも互換にするため、IndexErrorを併せて継承します。
class MemoryAccessFault(MachineFault, IndexError):
    pass


# @intent:responsibility 存在しない汎用レジスタ（0-15以外）の指定を表します。
class InvalidRegisterFault(MachineFault, ValueError):
    pass


# @intent:responsibility コールスタックの溢れ（17段目のプッシュ）を表します。
class StackOverflowFault(MachineFault):
    pass


# @intent:responsibility 空のコールスタックからのポップを表します。
class StackUnderflowFault(MachineFault):
    pass


# @intent:responsibility デコーダの到達不能な分岐に入ったことを表します。
class DecodeFault(MachineFault):
    pass
