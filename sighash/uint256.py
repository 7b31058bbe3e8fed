"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

256-bit unsigned integer used for transaction ids and signature hashes
"""

import struct


class uint256:
    """256-bit unsigned integer"""

    WIDTH = 8  # 8 * 32 bits = 256 bits

    def __init__(self, value=0):
        if isinstance(value, str):
            self.pn = [0] * self.WIDTH
            self.set_hex(value)
        elif isinstance(value, int):
            self.pn = [0] * self.WIDTH
            self.pn[0] = value & 0xFFFFFFFF
            self.pn[1] = (value >> 32) & 0xFFFFFFFF
        elif isinstance(value, (bytes, bytearray)):
            if len(value) != 32:
                raise ValueError("uint256 needs 32 bytes, got %d" % len(value))
            self.pn = list(struct.unpack("<8I", bytes(value)))
        elif isinstance(value, uint256):
            self.pn = value.pn[:]
        else:
            raise TypeError(f"Cannot build uint256 from {type(value)}")

    def __eq__(self, other):
        if isinstance(other, int):
            return self.pn[0] == other and all(x == 0 for x in self.pn[1:])
        if isinstance(other, uint256):
            return self.pn == other.pn
        return False

    def __ne__(self, other):
        return not self.__eq__(other)

    def is_null(self) -> bool:
        return all(x == 0 for x in self.pn)

    def set_hex(self, hex_str):
        """Set value from display (big-endian) hex string"""
        hex_str = hex_str.strip()
        if hex_str.startswith("0x") or hex_str.startswith("0X"):
            hex_str = hex_str[2:]

        # Pad to 64 hex chars (32 bytes)
        hex_str = hex_str.zfill(64)
        if len(hex_str) != 64:
            raise ValueError("uint256 hex too long: %r" % hex_str)

        # Display order is reversed relative to the little-endian words
        bytes_val = bytes.fromhex(hex_str)[::-1]
        self.pn = list(struct.unpack("<8I", bytes_val))

    def get_hex(self):
        """Get hex string representation"""
        bytes_val = struct.pack("<8I", *self.pn)
        # Reverse for display (big-endian)
        return bytes_val[::-1].hex()

    def __str__(self):
        return self.get_hex()

    def __repr__(self):
        return f"uint256('0x{self.get_hex()}')"

    def to_bytes(self):
        """Convert to 32-byte little-endian bytes"""
        return struct.pack("<8I", *self.pn)

    def __hash__(self):
        return hash(tuple(self.pn))
