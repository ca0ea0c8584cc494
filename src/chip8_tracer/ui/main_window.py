# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
表示ビュー、レジスタビュー、実行制御ツールバーを保持し、
QTimerによるフレーム駆動でCHIP-8マシンを実行します。
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QToolBar, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QKeyEvent, QKeySequence
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.host.keymap import KeyMap
from chip8_tracer.host.runner import FrameRunner
from .display_view import DisplayView
from .register_view import RegisterView

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
# @intent:rationale 実行はGUIスレッドのQTimerで行うため、表示バッファとキー状態に排他制御は不要です。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[EmulatorConfig] = None, rom_path: Optional[str] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self._config = config if config is not None else EmulatorConfig()
        self.setWindowTitle("CHIP-8 Core Tracer")

        self._keymap = KeyMap(self._config.keymap)
        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._run_frame)

        self._setup_backend()
        self._create_views()
        self._create_toolbar()
        self._create_menus()

        if rom_path:
            self.load_rom(rom_path)
        self._update_ui_state(False)

    # @intent:responsibility 設定からマシン、デバッガ、フレームランナーを生成します。
    # @intent:post-condition ROMのロードに失敗した場合は例外を送出し、現在のマシンはそのまま残ります。
    def _setup_backend(self, rom_path: Optional[str] = None):
        cpu, bus = SystemBuilder().build_system(self._config, rom_path)
        self.cpu, self.bus = cpu, bus
        self.debugger = Debugger(self.cpu, history_limit=self._config.history_limit)
        self.runner = FrameRunner(self.cpu, cpu_hz=self._config.cpu_hz, timer_hz=self._config.timer_hz)
        self._frame_timer.setInterval(self.runner.frame_interval_ms)

    def _create_views(self):
        display_cfg = self._config.display
        self.display_view = DisplayView(display_cfg.scale, display_cfg.foreground, display_cfg.background)
        self.setCentralWidget(self.display_view)

        self.register_view = RegisterView()
        self.register_view.set_cpu(self.cpu)
        dock = QDockWidget("Registers", self)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.pause_action = QAction("Pause", self)
        self.pause_action.triggered.connect(self.pause)
        toolbar.addAction(self.pause_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._choose_rom)
        file_menu.addAction(self.load_rom_action)

    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.pause_action.setEnabled(is_running)

    # @intent:responsibility ROMファイルをロードし、マシンを初期状態に戻します。
    def load_rom(self, path: str) -> None:
        self.pause()
        self._setup_backend(path)
        self.register_view.set_cpu(self.cpu)
        self._refresh_views()
        self.statusBar().showMessage(f"Loaded {path}")

    @Slot()
    def _choose_rom(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load ROM", "", "CHIP-8 ROM (*.ch8 *.c8 *.rom);;All Files (*)")
        if not path:
            return
        try:
            self.load_rom(path)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Load Error", str(e))

    @Slot()
    def start(self):
        self._update_ui_state(True)
        self._frame_timer.start()

    @Slot()
    def pause(self):
        self._frame_timer.stop()
        self._update_ui_state(False)

    @Slot()
    def _step(self):
        try:
            self.debugger.step_instruction()
        except Chip8Error as e:
            self._report_fault(e)
        self._refresh_views()

    @Slot()
    def _reset(self):
        self.pause()
        self.cpu.reset()
        self.debugger.clear_history()
        self._refresh_views()

    # @intent:responsibility 1フレーム分の命令を実行し、タイマーを減算して表示を更新します。
    @Slot()
    def _run_frame(self):
        try:
            snapshots = self.runner.run_frame(step=self.debugger.step_instruction,
                                              should_stop=self._should_break)
        except Chip8Error as e:
            self._report_fault(e)
        else:
            if snapshots and self._should_break(snapshots[-1]):
                self.pause()
                self.statusBar().showMessage(f"Breakpoint hit at PC: {self.cpu.get_state().pc:#06x}")
        self._refresh_views()

    def _should_break(self, snapshot) -> bool:
        return self.debugger.check_breakpoints(snapshot) or self.debugger.is_pc_breakpoint(self.cpu.get_state().pc)

    # @intent:responsibility コアの致命的エラーで実行を停止し、ユーザーに通知します。
    def _report_fault(self, error: Chip8Error):
        self.pause()
        self.statusBar().showMessage(str(error))
        QMessageBox.critical(self, "Execution Error", str(error))

    def _refresh_views(self):
        self.display_view.set_frame(self.cpu.display.pixels)
        self.register_view.update_registers()

    # @intent:responsibility Qtのキーイベントをキー名に変換し、キーマップ経由でキーパッドへ反映します。
    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not self._apply_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not self._apply_key(event, False):
            super().keyReleaseEvent(event)

    def _apply_key(self, event: QKeyEvent, pressed: bool) -> bool:
        key_name = QKeySequence(int(event.key())).toString()
        return bool(key_name) and self._keymap.apply(self.cpu.keypad, key_name, pressed)
