# src/chip8_tracer/arch/chip8/peripherals.py
"""
命令実行時にレジスタ以外で参照される周辺状態（表示、キー、乱数源）の束。
"""
import random
from dataclasses import dataclass, field

from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.arch.chip8.keypad import Keypad

# @intent:responsibility 命令実装に渡す周辺状態をまとめます。
# @intent:rationale 命令関数のシグネチャを (state, bus, io, op) に揃え、CPUクラスへの依存を避けます。
@dataclass
class Peripherals:
    display: Display = field(default_factory=Display)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)

    # @intent:responsibility 一様な8bit乱数を返します。
    def random_byte(self) -> int:
        return self.rng.randrange(0x100)
