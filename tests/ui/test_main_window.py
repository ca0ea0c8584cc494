# tests/ui/test_main_window.py
import pytest
from PySide6.QtCore import Qt, QEvent
from PySide6.QtGui import QKeyEvent

from chip8_tracer.ui import main_window as main_window_module
from chip8_tracer.ui.main_window import MainWindow

@pytest.fixture
def rom(tmp_path):
    path = tmp_path / "loop.ch8"
    # 200: LD V1, #$07 / 202: JP $202
    path.write_bytes(bytes([0x61, 0x07, 0x12, 0x02]))
    return str(path)

@pytest.fixture
def critical_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(main_window_module.QMessageBox, "critical",
                        lambda *args: calls.append(args))
    return calls

class TestMainWindow:
    def test_load_rom_and_step(self, qapp, rom):
        window = MainWindow(rom_path=rom)
        window._step()
        assert window.cpu.get_state().v[1] == 7
        assert window.register_view.get_register_text("V1") == "V1: 07"

    def test_start_pause(self, qapp, rom):
        window = MainWindow(rom_path=rom)
        window.start()
        assert window._frame_timer.isActive()
        assert not window.run_action.isEnabled()
        window.pause()
        assert not window._frame_timer.isActive()
        assert window.run_action.isEnabled()

    def test_run_frame_executes_one_frame(self, qapp, rom):
        window = MainWindow(rom_path=rom)
        window.cpu.get_state().delay_timer = 3
        window._run_frame()
        assert window.cpu.get_cycle_count() == window.runner.cycles_per_frame
        assert window.cpu.get_state().delay_timer == 2

    def test_fault_pauses_and_reports(self, qapp, tmp_path, critical_calls):
        path = tmp_path / "bad.ch8"
        path.write_bytes(bytes([0xFF, 0xFF]))
        window = MainWindow(rom_path=str(path))
        window.start()

        window._run_frame()

        assert not window._frame_timer.isActive()
        assert len(critical_calls) == 1
        assert "Unimplemented opcode 0xFFFF" in critical_calls[0][2]

    def test_reset(self, qapp, rom):
        window = MainWindow(rom_path=rom)
        window._step()
        window._reset()
        assert window.cpu.get_state().pc == 0x200
        assert window.cpu.get_state().v[1] == 0
        assert window.debugger.get_history() == []

    def test_key_events_drive_keypad(self, qapp, rom):
        window = MainWindow(rom_path=rom)
        window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Q, Qt.NoModifier, "q"))
        assert window.cpu.keypad.is_pressed(0x4)
        window.keyReleaseEvent(QKeyEvent(QEvent.KeyRelease, Qt.Key_Q, Qt.NoModifier, "q"))
        assert not window.cpu.keypad.is_pressed(0x4)

    # @intent:test_case_load_failure ロードに失敗しても、直前のマシンとビューの対応は維持される
    def test_failed_rom_load_keeps_current_machine(self, qapp, rom, tmp_path, monkeypatch, critical_calls):
        window = MainWindow(rom_path=rom)
        window._step()
        cpu_before, bus_before, debugger_before = window.cpu, window.bus, window.debugger

        oversized = tmp_path / "huge.ch8"
        oversized.write_bytes(bytes(4000))
        monkeypatch.setattr(main_window_module.QFileDialog, "getOpenFileName",
                            lambda *args: (str(oversized), ""))
        window._choose_rom()

        assert len(critical_calls) == 1
        assert window.cpu is cpu_before
        assert window.bus is bus_before
        assert window.debugger is debugger_before
        assert window.runner._cpu is cpu_before
        assert window.bus.peek(0x200) == 0x61

        cpu_before.get_state().v[2] = 0x5A
        window._refresh_views()
        assert window.register_view.get_register_text("V2") == "V2: 5A"
