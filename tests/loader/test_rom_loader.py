# tests/loader/test_rom_loader.py
import pytest

from chip8_tracer.arch.chip8.cpu import create_memory_bus
from chip8_tracer.core.errors import RomTooLargeError
from chip8_tracer.loader.loader import RomLoader, MAX_ROM_SIZE

# @intent:test_suite 生ROMイメージのロードを検証します。
class TestRomLoader:
    def test_load_bytes_places_image_at_program_start(self):
        bus = create_memory_bus()
        count = RomLoader().load_bytes(bytes([0x12, 0x34, 0xAB]), bus)
        assert count == 3
        assert [bus.peek(a) for a in range(0x200, 0x203)] == [0x12, 0x34, 0xAB]
        # ローダーはバスログを残さない
        assert bus.get_and_clear_activity_log() == []

    def test_load_rom_from_file(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0x00, 0xE0, 0x12, 0x00]))
        bus = create_memory_bus()
        assert RomLoader().load_rom(rom, bus) == 4
        assert bus.peek(0x201) == 0xE0

    def test_maximum_size_fits(self):
        bus = create_memory_bus()
        data = bytes([0x5A]) * MAX_ROM_SIZE
        assert RomLoader().load_bytes(data, bus) == 3584
        assert bus.peek(0xFFF) == 0x5A

    def test_oversized_rom_is_rejected(self):
        bus = create_memory_bus()
        with pytest.raises(RomTooLargeError) as excinfo:
            RomLoader().load_bytes(bytes(MAX_ROM_SIZE + 1), bus)
        assert isinstance(excinfo.value, ValueError)
        # 何も書き込まれていない
        assert bus.peek(0x200) == 0

    def test_empty_rom_is_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            RomLoader().load_bytes(b"", create_memory_bus())

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RomLoader().load_rom(tmp_path / "missing.ch8", create_memory_bus())
