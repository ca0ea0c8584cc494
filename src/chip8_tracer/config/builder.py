import random
from typing import Optional, Tuple, Union
from pathlib import Path

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.cpu import Chip8Cpu, create_memory_bus
from chip8_tracer.loader.loader import RomLoader
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、Bus、CPUを生成・接続し、必要ならROMをロードします。
class SystemBuilder:
    def build_system(self, config: EmulatorConfig, rom_path: Optional[Union[str, Path]] = None) -> Tuple[Chip8Cpu, Bus]:
        bus = create_memory_bus()
        cpu = Chip8Cpu(bus, rng=random.Random(config.seed))

        if rom_path is not None:
            RomLoader().load_rom(rom_path, bus)

        return cpu, bus
