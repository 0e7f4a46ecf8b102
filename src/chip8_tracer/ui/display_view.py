"""
ディスプレイビューの実装。
マシンのフレームバッファ（RGBAバイト列）を拡大して表示します。
"""
from typing import Optional

from PySide6.QtCore import QSize
from PySide6.QtGui import QImage, QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from chip8_tracer.transport.framebuffer import HEIGHT, WIDTH

# @intent:responsibility 64x32のフレームをスムージング無しで拡大描画するウィジェットです。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._image: Optional[QImage] = None
        self.setMinimumSize(WIDTH, HEIGHT)

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._scale, HEIGHT * self._scale)

    # @intent:responsibility 新しいフレームを受け取り、再描画を要求します。
    # @intent:pre-condition rgbaは WIDTH * HEIGHT * 4 バイトである必要があります。
    def set_frame(self, rgba: bytes) -> None:
        if len(rgba) != WIDTH * HEIGHT * 4:
            raise ValueError(f"Frame must be {WIDTH * HEIGHT * 4} bytes, got {len(rgba)}")
        # QImageは元バッファを参照するため、copy()で所有権を持たせる
        self._image = QImage(rgba, WIDTH, HEIGHT, WIDTH * 4, QImage.Format.Format_RGBA8888).copy()
        self.update()

    def current_frame(self) -> Optional[QImage]:
        return self._image

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._image is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, False)
        painter.drawImage(self.rect(), self._image)
        painter.end()
