# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。
生バイナリ形式のCHIP-8プログラムイメージを読み込み、プログラム領域に収まるか検証します。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.transport.memory import OFFSET_PROGRAM, PROGRAM_REGION_SIZE

logger = logging.getLogger(__name__)

class RomLoader:
    """
    生バイナリ（.ch8など）のプログラムイメージを読み込むローダー。
    イメージは0x200から逐語的にコピーされる前提で、ヘッダ等の解釈は行いません。
    """
    def load_file(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        with open(path, 'rb') as f:
            data = f.read()

        program = self.load_bytes(data, source=str(path))
        logger.info("Loaded program %s (%d bytes)", path, len(program))
        return program

    # @intent:responsibility メモリ上のイメージを検証して返します。
    # @intent:pre-condition イメージは空でなく、プログラム領域(3584バイト)以下である必要があります。
    def load_bytes(self, data: bytes, source: str = "<bytes>") -> bytes:
        if not data:
            raise ValueError(f"Program image {source} is empty")
        if len(data) > PROGRAM_REGION_SIZE:
            raise ValueError(
                f"Program image {source} is {len(data)} bytes; at most {PROGRAM_REGION_SIZE} bytes "
                f"fit at {OFFSET_PROGRAM:#05x}"
            )
        return bytes(data)
