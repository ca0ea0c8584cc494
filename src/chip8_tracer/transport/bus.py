# chip8_tracer/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、CHIP-8の4KBメモリアドレス空間を抽象化し、
読み書きアクセスを適切なデバイスに委譲する責務を負います。
"""
from abc import ABC, abstractmethod
from typing import List, Tuple
from dataclasses import dataclass
from enum import Enum
import warnings

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    全てのデバイスはreadとwriteのインターフェースを実装する必要があります。
    """
    # @intent:pre-condition アドレスはデバイスの有効範囲内である必要があります。
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

    # @intent:pre-condition アドレスはデバイスの有効範囲内であり、データは8bit値である必要があります。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        """
        pass

    # @intent:responsibility ログやアクセス保護を経由せずにデバイスを初期化します。
    def load_data(self, address: int, data: int) -> None:
        """
        フォントやプログラムイメージを配置するための書き込み。既定では write と同じです。
        """
        self.write(address, data)

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM(Device):
    """
    プログラム領域などに使う読み書き可能なメモリデバイス。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for RAM of size {self._size}.")
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for RAM of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility RAMのサイズを返します。
    def get_size(self) -> int:
        return self._size

# @intent:responsibility 読み込み専用メモリ(ROM)の機能を提供します。
class ROM(RAM):
    """
    読み込み専用メモリデバイス。CHIP-8ではフォント領域(0x000-0x04F)に使います。
    バス経由の書き込みは無視され、RuntimeWarningが発行されます。
    load_data メソッド経由でのみ内容を初期化できます。
    """
    # @intent:rationale 実行中のプログラムがフォント領域を壊さないよう、例外ではなく警告を出して無視します。
    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for ROM of size {self._size}.")
        warnings.warn(f"Ignored write of {data:#04x} to read-only offset {address:#05x}.", RuntimeWarning)

    def load_data(self, address: int, data: int) -> None:
        super().write(address, data)

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
# @intent:rationale バスの全てのアクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Bus:
    """
    メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
    バス上で行われた全てのメモリアクセスを記録する機能を提供します。
    """
    def __init__(self):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        """
        現在のバスアクティビティログを返し、内部ログをクリアします。
        """
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition start_address <= end_addressかつ非負であり、deviceはDeviceのインスタンスである必要があります。
    # @intent:rationale アドレス範囲の重複チェックは行いません。システム構成側で管理します。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        """
        指定されたアドレス範囲にデバイスを登録します。
        RAM/ROMの場合、サイズはアドレス範囲と一致する必要があります。
        """
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:post-condition デバイスが見つからなかった場合、IndexErrorを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise IndexError(f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出し、ログに記録します。
    def read(self, address: int) -> int:
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし）。
        逆アセンブラやUIなどのインスペクタ用。
        """
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込み、ログに記録します。
    def write(self, address: int, data: int) -> None:
        """
        ROM領域への書き込みはデバイス側で無視されますが、アクセス自体はログに残ります。
        """
        device, offset = self._find_device(address)
        device.write(offset, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility ローダー専用の書き込み口。ROMにも書き込め、ログは残しません。
    def load(self, address: int, data: int) -> None:
        device, offset = self._find_device(address)
        device.load_data(offset, data)

    # @intent:responsibility 連続したバイト列をローダー経由で配置します。
    def load_block(self, start_address: int, data: bytes) -> None:
        for offset, value in enumerate(data):
            self.load(start_address + offset, value)
