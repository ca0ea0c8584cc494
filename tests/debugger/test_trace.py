# tests/debugger/test_trace.py
import io

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.debugger.trace import run_trace

# 200: CLS / 202: LD I, $000 / 204: DRW V0, V0, 5 / 206: JP $206
GLYPH_PROGRAM = bytes([0x00, 0xE0, 0xA0, 0x00, 0xD0, 0x05, 0x12, 0x06])

def _cpu_with(program):
    cpu = Chip8Cpu()
    cpu.get_bus().load_block(0x200, program)
    return cpu

class TestRunTrace:
    def test_trace_lines_and_final_frame(self):
        out, err = io.StringIO(), io.StringIO()
        status = run_trace(_cpu_with(GLYPH_PROGRAM), 5, out=out, err=err)

        assert status == 0
        lines = out.getvalue().splitlines()
        assert lines[:5] == [
            "200  00E0  CLS",
            "202  A000  LD I, $000",
            "204  D015  DRW V0, V0, 5",
            "206  1206  JP $206",
            "206  1206  JP $206",
        ]
        frame = lines[5:]
        assert len(frame) == 32
        assert frame[0].startswith("####....")
        assert err.getvalue() == ""

    def test_trace_stops_mid_frame(self):
        out = io.StringIO()
        cpu = _cpu_with(GLYPH_PROGRAM)
        run_trace(cpu, 3, cpu_hz=700, timer_hz=60, out=out, err=io.StringIO())
        assert cpu.get_cycle_count() == 3

    def test_fault_reports_error_and_status(self):
        out, err = io.StringIO(), io.StringIO()
        status = run_trace(_cpu_with(bytes([0xFF, 0xFF])), 10, out=out, err=err)

        assert status == 1
        assert "Unimplemented opcode 0xFFFF at 0x200" in err.getvalue()
        # フレームバッファは異常時でも出力される
        assert len(out.getvalue().splitlines()) == 32
