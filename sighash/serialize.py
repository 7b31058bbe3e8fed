"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Serialization system for the transaction wire format
"""

import struct
from typing import Tuple

VERSION = 101

# Serialization flags
SER_NETWORK = 1 << 0
SER_GETHASH = 1 << 2

def get_size_of_compact_size(n_size: int) -> int:
    """Get size of compact size encoding"""
    if n_size < 253:
        return 1
    elif n_size <= 0xFFFF:
        return 3
    elif n_size <= 0xFFFFFFFF:
        return 5
    else:
        return 9

def write_compact_size(stream: bytearray, n_size: int):
    """Write compact size to stream"""
    if n_size < 253:
        stream.extend(struct.pack("<B", n_size))
    elif n_size <= 0xFFFF:
        stream.extend(struct.pack("<BH", 253, n_size))
    elif n_size <= 0xFFFFFFFF:
        stream.extend(struct.pack("<BI", 254, n_size))
    else:
        stream.extend(struct.pack("<BQ", 255, n_size))

def read_compact_size(data: bytes, offset: int) -> Tuple[int, int]:
    """Read compact size from data, returns (value, new_offset)"""
    if offset >= len(data):
        raise ValueError("End of data")

    ch_size = data[offset]
    offset += 1

    if ch_size < 253:
        return ch_size, offset
    elif ch_size == 253:
        if offset + 2 > len(data):
            raise ValueError("End of data")
        n_size = struct.unpack("<H", data[offset : offset + 2])[0]
        return n_size, offset + 2
    elif ch_size == 254:
        if offset + 4 > len(data):
            raise ValueError("End of data")
        n_size = struct.unpack("<I", data[offset : offset + 4])[0]
        return n_size, offset + 4
    else:  # 255
        if offset + 8 > len(data):
            raise ValueError("End of data")
        n_size = struct.unpack("<Q", data[offset : offset + 8])[0]
        return n_size, offset + 8

class DataStream:
    """Data stream for serialization"""

    def __init__(self, stream_type: int = 0, version: int = VERSION, data: bytes = b""):
        self.vch = bytearray(data)
        self.n_read_pos = 0
        self.n_type = stream_type
        self.n_version = version

    def write(self, data: bytes):
        """Write data to stream"""
        self.vch.extend(data)

    def read(self, n_size: int) -> bytes:
        """Read data from stream"""
        if self.n_read_pos + n_size > len(self.vch):
            raise ValueError("End of data")
        result = bytes(self.vch[self.n_read_pos : self.n_read_pos + n_size])
        self.n_read_pos += n_size
        return result

    def read_compact_size(self) -> int:
        """Read a compact size at the read position and advance past it"""
        n_size, self.n_read_pos = read_compact_size(self.vch, self.n_read_pos)
        return n_size

    def write_compact_size(self, n_size: int):
        write_compact_size(self.vch, n_size)

    def get_bytes(self) -> bytes:
        """Get all bytes"""
        return bytes(self.vch)

