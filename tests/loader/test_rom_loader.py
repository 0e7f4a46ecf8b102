import pytest

from chip8_tracer.loader.loader import RomLoader
from chip8_tracer.transport.memory import PROGRAM_REGION_SIZE

# @intent:test_suite 生バイナリのプログラムイメージ読み込みとサイズ検証を検証します。

@pytest.fixture
def loader():
    return RomLoader()


class TestRomLoader:
    def test_load_file(self, loader, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0x00, 0xE0, 0x12, 0x00]))
        assert loader.load_file(rom) == bytes([0x00, 0xE0, 0x12, 0x00])

    def test_load_file_accepts_str_path(self, loader, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x12\x00")
        assert loader.load_file(str(rom)) == b"\x12\x00"

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load_file(tmp_path / "missing.ch8")

    def test_empty_image(self, loader):
        with pytest.raises(ValueError):
            loader.load_bytes(b"")

    def test_largest_image_fits(self, loader):
        data = bytes(PROGRAM_REGION_SIZE)
        assert loader.load_bytes(data) == data

    def test_oversized_image(self, loader, tmp_path):
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes(PROGRAM_REGION_SIZE + 1))
        with pytest.raises(ValueError, match="big.ch8"):
            loader.load_file(rom)
