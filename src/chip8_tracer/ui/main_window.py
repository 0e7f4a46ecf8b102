# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
エンジンを一定レートでステップ実行し、フレームバッファを表示し、キー入力をエンジンに渡します。
"""
import logging

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QCloseEvent, QFontDatabase, QKeyEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QMessageBox

from chip8_tracer.common.errors import MachineFault
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.machine import Machine
from .display_view import DisplayView
from .keymap import KeyState, key_code

logger = logging.getLogger(__name__)

WINDOW_TITLE = "CHIP-8 Tracer"

# @intent:responsibility エミュレータのメインウィンドウ。フレームタイマーでステップ実行と再描画を駆動します。
class MainWindow(QMainWindow):
    """
    フレーム毎に steps_per_frame 回 step() を呼び、その後フレームバッファを描画します。
    エンジンはこのウィンドウのスレッド（Qtのイベントループ）からのみ操作されます。
    """
    def __init__(self, machine: Machine, config: EmulatorConfig, parent=None):
        super().__init__(parent)
        self._machine = machine
        self._config = config
        self._keys = KeyState(config.keymap)

        self.display_view = DisplayView(config.scale)
        self.setCentralWidget(self.display_view)

        self.status_label = QLabel()
        self.status_label.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.statusBar().addWidget(self.status_label)

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, round(1000 / config.frame_rate)))
        self._timer.timeout.connect(self._run_frame)

        self._refresh()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    # @intent:responsibility 1フレーム分のステップを実行し、表示を更新します。
    # @intent:rationale 致命的フォールトからは回復しないため、タイマーを止めてユーザーに通知します。
    @Slot()
    def _run_frame(self) -> None:
        keys = self._keys.pressed()
        try:
            for _ in range(self._config.steps_per_frame):
                self._machine.step(keys)
        except MachineFault as e:
            self.stop()
            logger.exception("Machine fault at PC %#05x", self._machine.program_counter)
            QMessageBox.critical(self, "Machine Fault", f"Execution stopped: {e}")
        self._refresh()

    def _refresh(self) -> None:
        colors = self._config.colors
        self.display_view.set_frame(self._machine.draw(colors.on, colors.off))
        self._update_status()

    def _update_status(self) -> None:
        regs = self._machine.get_register_map()
        self.status_label.setText(
            f"PC:{regs['PC']:03X} I:{regs['I']:03X} SP:{regs['SP']:X} DT:{regs['DT']:02X} ST:{regs['ST']:02X}"
        )
        title = WINDOW_TITLE
        if self._machine.quirks.is_active:
            title += " [QUIRKS]"
        if self._machine.is_paused:
            title += " [PAUSED]"
        if self._machine.sound_active:
            title += " [SOUND]"
        self.setWindowTitle(title)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if key_code(event.key()) == key_code(Qt.Key.Key_Escape):
            self.close()
            return
        if event.isAutoRepeat() or not self._keys.press(event.key()):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat() or not self._keys.release(event.key()):
            super().keyReleaseEvent(event)

    def focusOutEvent(self, event) -> None:
        self._keys.release_all()
        super().focusOutEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.stop()
        event.accept()
