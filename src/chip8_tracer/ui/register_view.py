# src/chip8_tracer/ui/register_view.py
"""
CPUのレジスタを表示する汎用ウィジェット。
AbstractCpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import AbstractCpu

# @intent:responsibility CPUのレジスタ値を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    グループごとに4列のグリッドで「名前: 値」を並べます。
    """
    COLUMNS = 4

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._cpu: Optional[AbstractCpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        # 既存のウィジェットをクリア
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("QGroupBox { font-weight: bold; color: #EEE; } "
                                    "QGroupBox::title { color: #00AAAA; }")
            grid = QGridLayout(group_box)
            grid.setHorizontalSpacing(12)

            for pos, reg in enumerate(group.registers):
                hex_width = (reg.width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width

                label_value = QLabel(f"{reg.name}: {'0' * hex_width}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignLeft)

                grid.addWidget(label_value, pos // self.COLUMNS, pos % self.COLUMNS)
                self._register_labels[reg.name] = label_value

            self._layout.addWidget(group_box)

        self._layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、レジスタの表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"{name}: {value:0{width}X}")

    # @intent:accessor テストや他のビューから表示中の文字列を参照します。
    def get_register_text(self, name: str) -> str:
        return self._register_labels[name].text()
