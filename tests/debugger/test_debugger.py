# tests/debugger/test_debugger.py
import pytest

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType

# 200: LD V0, #$00 / 202: ADD V0, #$01 / 204: JP $202
COUNTER_PROGRAM = bytes([0x60, 0x00, 0x70, 0x01, 0x12, 0x02])
# 200: LD I, $300 / 202: LD V0, #$42 / 204: LD [I], V0 / 206: LD V0, [I] / 208: JP $208
MEMORY_PROGRAM = bytes([0xA3, 0x00, 0x60, 0x42, 0xF0, 0x55, 0xF0, 0x65, 0x12, 0x08])

def _make_debugger(program, **kwargs):
    cpu = Chip8Cpu()
    cpu.get_bus().load_block(0x200, program)
    return cpu, Debugger(cpu, **kwargs)

# @intent:test_suite デバッガのステップ実行とブレークポイント評価を検証します。
class TestDebugger:
    def test_step_instruction_records_history(self):
        cpu, debugger = _make_debugger(COUNTER_PROGRAM)
        snapshot = debugger.step_instruction()
        assert snapshot.state.pc == 0x202
        assert debugger.get_last_snapshot() is snapshot
        assert debugger.get_history() == [snapshot]

    def test_pc_breakpoint(self, capsys):
        cpu, debugger = _make_debugger(COUNTER_PROGRAM)
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204)
        debugger.add_breakpoint(bp)

        assert debugger.run() == 2
        assert cpu.get_state().pc == 0x204
        assert not debugger.is_running()
        assert "Breakpoint hit at PC: 0x0204" in capsys.readouterr().out

        # ブレークポイント上から再開すると、まず1命令進めてから評価する
        assert debugger.run() == 2
        assert cpu.get_state().pc == 0x204
        assert cpu.get_state().v[0] == 2

    def test_register_value_breakpoint(self):
        cpu, debugger = _make_debugger(COUNTER_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_VALUE,
                                                    value=3, register_name="V0"))
        assert debugger.run() == 6
        assert cpu.get_state().v[0] == 3

    def test_register_change_breakpoint(self):
        cpu, debugger = _make_debugger(MEMORY_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="I"))
        assert debugger.run() == 1
        assert cpu.get_state().i == 0x300

    def test_memory_write_breakpoint(self):
        cpu, debugger = _make_debugger(MEMORY_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300))
        assert debugger.run() == 3
        assert cpu.get_bus().peek(0x300) == 0x42

    def test_memory_read_breakpoint(self):
        cpu, debugger = _make_debugger(MEMORY_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x300))
        assert debugger.run() == 4
        assert cpu.get_state().pc == 0x208

    def test_disabled_breakpoint_is_ignored(self):
        cpu, debugger = _make_debugger(COUNTER_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204, enabled=False))
        assert debugger.run(max_steps=10) == 10

    def test_breakpoint_management(self):
        _, debugger = _make_debugger(COUNTER_PROGRAM)
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202)
        new_bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204)

        debugger.add_breakpoint(bp)
        debugger.add_breakpoint(bp)
        assert debugger.get_breakpoints() == [bp]

        debugger.update_breakpoint(bp, new_bp)
        assert debugger.get_breakpoints() == [new_bp]
        assert debugger.is_pc_breakpoint(0x204)

        debugger.remove_breakpoint(new_bp)
        assert debugger.get_breakpoints() == []

    @pytest.mark.parametrize("max_steps", [0, 1, 5])
    def test_max_steps(self, max_steps):
        _, debugger = _make_debugger(COUNTER_PROGRAM)
        assert debugger.run(max_steps=max_steps) == max_steps

    def test_history_limit(self):
        _, debugger = _make_debugger(COUNTER_PROGRAM, history_limit=3)
        debugger.run(max_steps=5)
        history = debugger.get_history()
        assert len(history) == 3
        assert history[-1].metadata.cycle_count == 5

        debugger.clear_history()
        assert debugger.get_history() == []
        assert debugger.get_last_snapshot() is None

    def test_step_and_check(self):
        _, debugger = _make_debugger(COUNTER_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204))
        assert debugger.step_and_check() is False
        assert debugger.step_and_check() is True
