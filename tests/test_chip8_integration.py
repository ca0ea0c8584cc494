# tests/test_chip8_integration.py
"""
小さなプログラムを通しで実行する結合テスト。
サブルーチン呼び出し、BCD変換、フォント描画、タイマー待ちを組み合わせます。
"""
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.host.runner import FrameRunner

PROGRAM = bytes([
    0x6A, 0x7B,  # 200: LD VA, #$7B (123)
    0x22, 0x10,  # 202: CALL $210
    0x63, 0x02,  # 204: LD V3, #$02
    0xF3, 0x15,  # 206: LD DT, V3
    0xF4, 0x07,  # 208: LD V4, DT
    0x34, 0x00,  # 20A: SE V4, #$00
    0x12, 0x08,  # 20C: JP $208
    0x12, 0x0E,  # 20E: JP $20E
    0xA3, 0x00,  # 210: LD I, $300
    0xFA, 0x33,  # 212: LD B, VA
    0xF2, 0x65,  # 214: LD V2, [I]
    0xF0, 0x29,  # 216: LD F, V0
    0x65, 0x00,  # 218: LD V5, #$00
    0xD5, 0x55,  # 21A: DRW V5, V5, 5
    0x00, 0xEE,  # 21C: RET
])

class TestIntegration:
    def test_program_runs_to_idle_loop(self):
        cpu = Chip8Cpu()
        cpu.get_bus().load_block(0x200, PROGRAM)
        runner = FrameRunner(cpu, cpu_hz=700, timer_hz=60)

        for _ in range(5):
            runner.run_frame()

        state = cpu.get_state()
        assert state.pc == 0x20E
        assert state.sp == 0
        assert state.v[0:3] == [1, 2, 3]
        assert [cpu.get_bus().peek(a) for a in range(0x300, 0x303)] == [1, 2, 3]
        # LD F, V0 で I はグリフ「1」を指す
        assert state.i == 5
        assert state.delay_timer == 0
        # 数字「1」のグリフ(20 60 20 20 70)が左上に描かれている
        assert cpu.display.render_text().splitlines()[0][:8] == "..#....."
        assert cpu.display.render_text().splitlines()[4][:8] == ".###...."
