# tests/ui/test_app.py
import random

import pytest

from chip8_tracer.ui import app as app_module
from chip8_tracer.ui.app import build_parser, main

class TestApp:
    def test_parser(self):
        args = build_parser().parse_args(["game.ch8", "--trace", "10", "--scale", "4"])
        assert args.rom == "game.ch8"
        assert args.trace == 10
        assert args.scale == 4
        assert args.config is None

    def test_trace_mode(self, tmp_path, capsys):
        rom = tmp_path / "rom.ch8"
        rom.write_bytes(bytes([0x60, 0x05, 0x12, 0x02]))
        assert main([str(rom), "--trace", "2"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "200  6005  LD V0, #$05"
        assert out[1] == "202  1202  JP $202"

    # @intent:test_case_config 設定ファイルのシードと周期がトレース実行のマシンに渡ることを検証します。
    def test_trace_mode_uses_config(self, tmp_path, monkeypatch):
        rom = tmp_path / "rom.ch8"
        rom.write_bytes(bytes([0xC0, 0xFF, 0x12, 0x02]))
        config = tmp_path / "chip8.yaml"
        config.write_text("seed: 7\ncpu_hz: 60\n")
        captured = {}

        def fake_run_trace(cpu, steps, cpu_hz, timer_hz):
            captured.update(cpu=cpu, steps=steps, cpu_hz=cpu_hz, timer_hz=timer_hz)
            return 0

        monkeypatch.setattr(app_module, "run_trace", fake_run_trace)
        assert main([str(rom), "--config", str(config), "--trace", "1"]) == 0

        assert (captured["steps"], captured["cpu_hz"], captured["timer_hz"]) == (1, 60, 60)
        cpu = captured["cpu"]
        cpu.step()
        assert cpu.get_state().v[0] == random.Random(7).randrange(0x100)

    @pytest.mark.parametrize("scale", ["0", "-3"])
    def test_non_positive_scale_is_rejected(self, scale, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--scale", scale, "--trace", "1", "rom.ch8"])
        assert excinfo.value.code == 2
        assert "--scale must be positive" in capsys.readouterr().err
