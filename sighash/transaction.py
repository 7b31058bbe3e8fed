"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Transaction model and wire serialization
"""

import struct
from typing import List

from sighash.crypto import double_sha256, hash_to_uint256
from sighash.script import Script
from sighash.serialize import SER_NETWORK, DataStream, get_size_of_compact_size
from sighash.uint256 import uint256
from sighash.util import error

# Constants
COIN = 100000000
MAX_MONEY = 21000000 * COIN
MAX_BLOCK_SIZE = 1000000
SEQUENCE_FINAL = 0xFFFFFFFF


def money_range(value: int) -> bool:
    return 0 <= value <= MAX_MONEY


class OutPoint:
    """Reference to a transaction output"""

    def __init__(self, hash_tx: uint256 = None, n: int = 0):
        self.hash = hash_tx if hash_tx else uint256(0)
        self.n = n

    def set_null(self):
        """Set to null"""
        self.hash = uint256(0)
        self.n = -1

    def is_null(self) -> bool:
        """Check if null"""
        return self.hash == uint256(0) and self.n == -1

    def serialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Serialize to stream"""
        stream.write(self.hash.to_bytes())
        # Handle -1 (null) as 0xFFFFFFFF (max unsigned int)
        n_value = self.n if self.n >= 0 else 0xFFFFFFFF
        stream.write(struct.pack("<I", n_value))

    def unserialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Unserialize from stream"""
        self.hash = hash_to_uint256(stream.read(32))
        n_value = struct.unpack("<I", stream.read(4))[0]
        # Convert 0xFFFFFFFF back to -1 (null)
        self.n = -1 if n_value == 0xFFFFFFFF else n_value

    def __eq__(self, other):
        return isinstance(other, OutPoint) and self.hash == other.hash and self.n == other.n

    def __hash__(self):
        return hash((self.hash, self.n))

    def __repr__(self):
        return f"OutPoint(hash={self.hash.get_hex()[:12]}, n={self.n})"

    def get_serialize_size(self, n_type: int = 0, n_version: int = 101) -> int:
        """Get serialized size"""
        return 32 + 4  # hash + n


class TxIn:
    """Transaction input"""

    def __init__(
        self,
        prevout: OutPoint = None,
        script_sig: Script = None,
        sequence: int = SEQUENCE_FINAL,
    ):
        self.prevout = prevout if prevout else OutPoint()
        self.script_sig = script_sig if script_sig else Script()
        self.sequence = sequence

    def serialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Serialize to stream"""
        self.prevout.serialize(stream, n_type, n_version)
        self.script_sig.serialize(stream, n_type, n_version)
        stream.write(struct.pack("<I", self.sequence))

    def unserialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Unserialize from stream"""
        self.prevout.unserialize(stream, n_type, n_version)
        self.script_sig.unserialize(stream, n_type, n_version)
        self.sequence = struct.unpack("<I", stream.read(4))[0]

    def __eq__(self, other):
        return (
            isinstance(other, TxIn)
            and self.prevout == other.prevout
            and self.script_sig == other.script_sig
            and self.sequence == other.sequence
        )

    def __repr__(self):
        return f"TxIn(prevout={self.prevout!r}, script_sig={self.script_sig}, sequence={self.sequence})"

    def get_serialize_size(self, n_type: int = 0, n_version: int = 101) -> int:
        """Get serialized size"""
        size = self.prevout.get_serialize_size(n_type, n_version)
        size += self.script_sig.get_serialize_size(n_type, n_version)
        size += 4  # sequence
        return size


class TxOut:
    """Transaction output"""

    def __init__(self, value: int = -1, script_pubkey: Script = None):
        self.value = value
        self.script_pubkey = script_pubkey if script_pubkey else Script()

    def serialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Serialize to stream"""
        # Signed: the null output carries -1
        stream.write(struct.pack("<q", self.value))
        self.script_pubkey.serialize(stream, n_type, n_version)

    def unserialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Unserialize from stream"""
        self.value = struct.unpack("<q", stream.read(8))[0]
        self.script_pubkey = Script()
        self.script_pubkey.unserialize(stream, n_type, n_version)

    def set_null(self):
        """Set to null"""
        self.value = -1
        self.script_pubkey = Script()

    def is_null(self) -> bool:
        """Check if null"""
        return self.value == -1

    def __eq__(self, other):
        return (
            isinstance(other, TxOut)
            and self.value == other.value
            and self.script_pubkey == other.script_pubkey
        )

    def __repr__(self):
        return f"TxOut(value={self.value}, script_pubkey={self.script_pubkey})"

    def get_serialize_size(self, n_type: int = 0, n_version: int = 101) -> int:
        """Get serialized size"""
        return 8 + self.script_pubkey.get_serialize_size(n_type, n_version)


class Transaction:
    """Transaction: version, inputs, outputs and lock time"""

    def __init__(self, version: int = 1, lock_time: int = 0):
        self.version = version
        self.vin: List[TxIn] = []
        self.vout: List[TxOut] = []
        self.lock_time = lock_time

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Transaction":
        """Decode a transaction from its wire encoding"""
        tx = cls()
        tx.unserialize(DataStream(SER_NETWORK, data=raw))
        return tx

    @classmethod
    def from_hex(cls, raw_hex: str) -> "Transaction":
        return cls.from_bytes(bytes.fromhex(raw_hex))

    def to_bytes(self) -> bytes:
        stream = DataStream(SER_NETWORK)
        self.serialize(stream)
        return stream.get_bytes()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def get_hash(self) -> uint256:
        """Get transaction hash"""
        return hash_to_uint256(double_sha256(self.to_bytes()))

    def serialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Serialize to stream"""
        stream.write(struct.pack("<i", self.version))
        stream.write_compact_size(len(self.vin))
        for txin in self.vin:
            txin.serialize(stream, n_type, n_version)
        stream.write_compact_size(len(self.vout))
        for txout in self.vout:
            txout.serialize(stream, n_type, n_version)
        stream.write(struct.pack("<I", self.lock_time))

    def unserialize(self, stream: DataStream, n_type: int = 0, n_version: int = 101):
        """Unserialize from stream"""
        self.version = struct.unpack("<i", stream.read(4))[0]
        vin_size = stream.read_compact_size()
        self.vin = []
        for _ in range(vin_size):
            txin = TxIn()
            txin.unserialize(stream, n_type, n_version)
            self.vin.append(txin)
        vout_size = stream.read_compact_size()
        self.vout = []
        for _ in range(vout_size):
            txout = TxOut()
            txout.unserialize(stream, n_type, n_version)
            self.vout.append(txout)
        self.lock_time = struct.unpack("<I", stream.read(4))[0]

    def get_serialize_size(self, n_type: int = 0, n_version: int = 101) -> int:
        """Get serialized size"""
        size = 4  # version
        size += get_size_of_compact_size(len(self.vin))
        for txin in self.vin:
            size += txin.get_serialize_size(n_type, n_version)
        size += get_size_of_compact_size(len(self.vout))
        for txout in self.vout:
            size += txout.get_serialize_size(n_type, n_version)
        size += 4  # lock_time
        return size

    def is_coinbase(self) -> bool:
        """Check if coinbase transaction"""
        return len(self.vin) == 1 and self.vin[0].prevout.is_null()

    def check_transaction(self) -> bool:
        """
        Context-free structural checks, as done by CheckTransaction()
        before a transaction is accepted anywhere
        """
        if not self.vin:
            return error("CheckTransaction() : vin empty")
        if not self.vout:
            return error("CheckTransaction() : vout empty")

        if self.get_serialize_size(SER_NETWORK) > MAX_BLOCK_SIZE:
            return error("CheckTransaction() : size limits failed")

        # Check for negative or overflow output values
        value_out = 0
        for txout in self.vout:
            if txout.value < 0:
                return error("CheckTransaction() : txout.value negative")
            if txout.value > MAX_MONEY:
                return error("CheckTransaction() : txout.value too high")
            value_out += txout.value
            if not money_range(value_out):
                return error("CheckTransaction() : txout total out of range")

        # Check for duplicate inputs
        seen = set()
        for txin in self.vin:
            if txin.prevout in seen:
                return error("CheckTransaction() : duplicate inputs")
            seen.add(txin.prevout)

        if self.is_coinbase():
            if not 2 <= len(self.vin[0].script_sig) <= 100:
                return error("CheckTransaction() : coinbase script size")
        else:
            for txin in self.vin:
                if txin.prevout.is_null():
                    return error("CheckTransaction() : prevout is null")

        return True

    def __eq__(self, other):
        return (
            isinstance(other, Transaction)
            and self.version == other.version
            and self.vin == other.vin
            and self.vout == other.vout
            and self.lock_time == other.lock_time
        )

    def __str__(self):
        hash_str = self.get_hash().get_hex()[:12]
        return f"Transaction(hash={hash_str}, vin={len(self.vin)}, vout={len(self.vout)})"

    def __repr__(self):
        return (
            f"Transaction(version={self.version}, "
            f"vin={len(self.vin)}, vout={len(self.vout)}, "
            f"lock_time={self.lock_time})"
        )
