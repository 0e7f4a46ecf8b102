# chip8_tracer/transport/framebuffer.py
"""
Transport Layer (フレームバッファ)

64x32のモノクロピクセルグリッドを保持し、XORによるスプライト合成と
衝突（コリジョン）検出を提供します。
"""
from typing import Iterable, Optional, Tuple

from chip8_tracer.common.types import Rgba

WIDTH = 64
HEIGHT = 32
SPRITE_WIDTH = 8

# @intent:constant 描画時の既定色（点灯・消灯）。いずれも不透明。
COLOR_ON: Rgba = (0, 128, 255, 255)
COLOR_OFF: Rgba = (0, 33, 66, 255)


# @intent:responsibility スプライトのXOR描画と衝突検出を行うモノクロフレームバッファです。
class Framebuffer:
    """
    64x32のモノクロフレームバッファ。
    グリッド外のピクセルへの描画は黙って捨てられます（ラップアラウンドもフォールトもしません）。
    """
    def __init__(self):
        self._pixels = bytearray(WIDTH * HEIGHT)

    # @intent:responsibility 全ピクセルを消灯します。
    def clear(self) -> None:
        self._pixels[:] = bytes(WIDTH * HEIGHT)

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {WIDTH}x{HEIGHT} framebuffer.")
        return self._pixels[y * WIDTH + x] != 0

    # @intent:responsibility 1ピクセルにXORを適用し、点灯→消灯の遷移（衝突）が起きたかを返します。
    # @intent:post-condition グリッド外の座標では何もせずFalseを返します。
    def _toggle_pixel(self, x: int, y: int, lit: bool) -> bool:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            return False
        index = y * WIDTH + x
        collision = lit and self._pixels[index] != 0
        if lit:
            self._pixels[index] ^= 1
        return collision

    # @intent:responsibility スプライトを(x, y)を左上として描画し、衝突の有無を返します。
    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """
        スプライトの各行（1バイト、MSBが最左ピクセル）をXORで描画します。
        いずれかのピクセルが点灯から消灯に変わった場合Trueを返します。
        """
        collision = False
        for dy, row in enumerate(rows):
            for dx in range(SPRITE_WIDTH):
                lit = (row >> (SPRITE_WIDTH - 1 - dx)) & 1 == 1
                collision |= self._toggle_pixel(x + dx, y + dy, lit)
        return collision

    # @intent:responsibility 全ピクセルの状態を行優先のタプルで返します。
    def pixels(self) -> Tuple[bool, ...]:
        return tuple(p != 0 for p in self._pixels)

    # @intent:responsibility 表示用にピクセルをRGBAの並び（行優先、左→右、上→下）へ変換します。
    # @intent:rationale 描画は非破壊な読み出しで、ステップの合間であればいつ呼んでも良い。
    def to_rgba(self, on: Optional[Rgba] = None, off: Optional[Rgba] = None) -> bytes:
        on_bytes = bytes(on or COLOR_ON)
        off_bytes = bytes(off or COLOR_OFF)
        return b"".join(on_bytes if p else off_bytes for p in self._pixels)
