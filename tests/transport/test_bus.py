# tests/transport/test_bus.py
"""
chip8_tracer.transport.busモジュールの単体テスト。
"""
import pytest
from chip8_tracer.transport.bus import Bus, Device, RAM, ROM, BusAccessType

# @intent:test_suite 共通バスとデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    """
    RAMデバイスの単体テスト。
    """
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(ram.read(i) == 0 for i in range(16))

    # @intent:test_case_init 無効なサイズでRAMを初期化するとValueErrorが発生することを検証します。
    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    def test_ram_read_write_within_bounds(self):
        ram = RAM(4)
        ram.write(0, 0x12)
        ram.write(3, 0x78)
        assert ram.read(0) == 0x12
        assert ram.read(3) == 0x78

    # @intent:test_case_oob 境界外アドレスへのアクセス時にIndexErrorが発生することを検証します。
    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(IndexError, match="Address 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(IndexError, match="Address -1 out of bounds for RAM of size 4."):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

class TestROM:
    # @intent:test_case_readonly 通常の書き込みは警告付きで無視され、load_dataでのみ初期化できることを検証します。
    def test_rom_ignores_writes_with_warning(self):
        rom = ROM(4)
        rom.load_data(1, 0xAB)
        with pytest.warns(RuntimeWarning, match="read-only"):
            rom.write(1, 0x00)
        assert rom.read(1) == 0xAB

    def test_rom_write_out_of_bounds(self):
        rom = ROM(4)
        with pytest.raises(IndexError):
            rom.write(4, 0x00)

class TestBus:
    """
    Busの単体テスト。
    """
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0x00F, ROM(16))
        bus.register_device(0x010, 0x01F, RAM(16))
        return bus

    def test_bus_dispatches_with_offset(self, bus):
        bus.write(0x01A, 0xBB)
        assert bus.read(0x01A) == 0xBB

    def test_bus_access_unmapped_address(self, bus):
        with pytest.raises(IndexError, match="not mapped to any device"):
            bus.read(0x020)

    def test_register_invalid_range_and_type(self):
        bus = Bus()
        with pytest.raises(ValueError, match="Invalid address range"):
            bus.register_device(0x10, 0x0F, RAM(1))
        with pytest.raises(TypeError):
            bus.register_device(0x00, 0x0F, object())
        with pytest.raises(ValueError, match="does not match"):
            bus.register_device(0x00, 0x0F, RAM(8))

    # @intent:test_case_log 読み書きがログに記録され、peekとloadは記録されないことを検証します。
    def test_activity_log(self, bus):
        bus.write(0x010, 0x01)
        bus.read(0x010)
        bus.peek(0x010)
        bus.load(0x011, 0x02)
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x010, 0x01, BusAccessType.WRITE),
            (0x010, 0x01, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    def test_load_block_writes_into_rom(self, bus):
        bus.load_block(0x00E, bytes([0x11, 0x22, 0x33]))
        assert bus.peek(0x00E) == 0x11
        assert bus.peek(0x00F) == 0x22
        assert bus.peek(0x010) == 0x33

    def test_write_to_rom_is_logged_but_ignored(self, bus):
        with pytest.warns(RuntimeWarning):
            bus.write(0x000, 0x55)
        assert bus.peek(0x000) == 0x00
        assert bus.get_and_clear_activity_log()[0].access_type == BusAccessType.WRITE
