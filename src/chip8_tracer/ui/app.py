# src/chip8_tracer/ui/app.py
"""
アプリケーションのエントリポイント。
引数を解析し、メインウィンドウを起動するか、ヘッドレスのトレース実行を行います。
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.debugger.trace import run_trace
from .main_window import MainWindow

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter and tracer")
    parser.add_argument("rom", nargs="?", help="CHIP-8 ROM image to load at 0x200")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--trace", type=int, metavar="N", help="run N instructions headless and print a trace")
    parser.add_argument("--scale", type=int, help="display scale factor (overrides config)")
    return parser

# @intent:responsibility 引数に従ってアプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.scale is not None and args.scale <= 0:
        parser.error("--scale must be positive")
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.scale is not None:
        config.display.scale = args.scale

    if args.trace is not None:
        if not args.rom:
            print("Error: --trace requires a ROM image.", file=sys.stderr)
            return 2
        cpu, _ = SystemBuilder().build_system(config, args.rom)
        return run_trace(cpu, args.trace, cpu_hz=config.cpu_hz, timer_hz=config.timer_hz)

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config, args.rom)
    main_win.show()
    if args.rom:
        main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
