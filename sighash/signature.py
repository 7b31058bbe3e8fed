"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Signature hash: the digest a transaction signature commits to
"""

import struct
from typing import Callable, Optional

from sighash.crypto import Key, double_sha256, hash_to_uint256
from sighash.script import OP_CODESEPARATOR, Script
from sighash.serialize import SER_GETHASH, DataStream
from sighash.transaction import Transaction, TxOut
from sighash.uint256 import uint256
from sighash.util import error

# Signature hash types
SIGHASH_ALL = 1
SIGHASH_NONE = 2
SIGHASH_SINGLE = 3
SIGHASH_ANYONECANPAY = 0x80

SIGHASH_BASE_MASK = 0x1F

# Returned instead of a digest when the input (or, under SIGHASH_SINGLE,
# the matching output) does not exist. Consensus depends on this value.
SIGHASH_ONE_VALUE = 1

SignatureHasher = Callable[[Script, Transaction, int, int], uint256]


class HashType:
    """Decoded hash type: base type in the low 5 bits, plus ANYONECANPAY"""

    def __init__(self, value: int):
        self.value = value
        self.base_type = value & SIGHASH_BASE_MASK
        self.anyone_can_pay = (value & SIGHASH_ANYONECANPAY) != 0

    @property
    def is_none(self) -> bool:
        return self.base_type == SIGHASH_NONE

    @property
    def is_single(self) -> bool:
        return self.base_type == SIGHASH_SINGLE

    @property
    def is_all(self) -> bool:
        # Unknown base types commit to everything, like SIGHASH_ALL
        return not (self.is_none or self.is_single)

    def __eq__(self, other):
        return isinstance(other, HashType) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return (
            f"HashType(value={self.value}, base_type={self.base_type}, "
            f"anyone_can_pay={self.anyone_can_pay})"
        )


class SignatureSerializer:
    """
    Writes the signature-hash view of a transaction straight to a stream

    Nothing is copied: input scripts, sequences and outputs are
    substituted as they are written, according to the hash type.
    """

    def __init__(self, tx_to: Transaction, script_code: Script, n_in: int, n_hash_type: int):
        self.tx_to = tx_to
        self.script_code = script_code
        self.n_in = n_in
        self.hash_type = HashType(n_hash_type)

    def serialize_script_code(self, stream: DataStream):
        """Write script_code with every OP_CODESEPARATOR left out"""
        script = self.script_code
        n_code_separators = script.count_op(OP_CODESEPARATOR)
        stream.write_compact_size(len(script) - n_code_separators)

        begin = 0
        for start, end, opcode in script.iter_ops():
            if opcode == OP_CODESEPARATOR:
                stream.write(bytes(script.data[begin:start]))
                begin = end
        stream.write(bytes(script.data[begin:]))

    def serialize_input(self, stream: DataStream, n_input: int):
        # With ANYONECANPAY only the signed input is written
        if self.hash_type.anyone_can_pay:
            n_input = self.n_in
        txin = self.tx_to.vin[n_input]

        txin.prevout.serialize(stream)
        if n_input != self.n_in:
            # Other inputs' scripts are blanked
            stream.write_compact_size(0)
        else:
            self.serialize_script_code(stream)

        if n_input != self.n_in and not self.hash_type.is_all:
            stream.write(struct.pack("<I", 0))
        else:
            stream.write(struct.pack("<I", txin.sequence))

    def serialize_output(self, stream: DataStream, n_output: int):
        if self.hash_type.is_single and n_output != self.n_in:
            TxOut().serialize(stream)
        else:
            self.tx_to.vout[n_output].serialize(stream)

    def serialize(self, stream: DataStream):
        stream.write(struct.pack("<i", self.tx_to.version))

        n_inputs = 1 if self.hash_type.anyone_can_pay else len(self.tx_to.vin)
        stream.write_compact_size(n_inputs)
        for n_input in range(n_inputs):
            self.serialize_input(stream, n_input)

        if self.hash_type.is_none:
            n_outputs = 0
        elif self.hash_type.is_single:
            n_outputs = self.n_in + 1
        else:
            n_outputs = len(self.tx_to.vout)
        stream.write_compact_size(n_outputs)
        for n_output in range(n_outputs):
            self.serialize_output(stream, n_output)

        stream.write(struct.pack("<I", self.tx_to.lock_time))


def signature_hash_preimage(
    script_code: Script, tx_to: Transaction, n_in: int, n_hash_type: int
) -> Optional[bytes]:
    """
    Build the exact bytes that signature_hash() double-hashes

    Returns None where signature_hash() returns SIGHASH_ONE_VALUE instead
    of a real digest: n_in is not an input of tx_to, or the hash type is
    SIGHASH_SINGLE and tx_to has no output at n_in.
    """
    if not 0 <= n_in < len(tx_to.vin):
        error("SignatureHash() : nIn=%d out of range", n_in)
        return None

    if (n_hash_type & SIGHASH_BASE_MASK) == SIGHASH_SINGLE and n_in >= len(tx_to.vout):
        error("SignatureHash() : nOut=%d out of range", n_in)
        return None

    stream = DataStream(SER_GETHASH)
    SignatureSerializer(tx_to, script_code, n_in, n_hash_type).serialize(stream)
    # The raw hash type is committed as a 4-byte little-endian int
    stream.write(struct.pack("<I", n_hash_type & 0xFFFFFFFF))
    return stream.get_bytes()


def signature_hash(script_code: Script, tx_to: Transaction, n_in: int, n_hash_type: int) -> uint256:
    """
    Compute signature hash for transaction

    Args:
        script_code: Script code to sign
        tx_to: Transaction being signed
        n_in: Input index
        n_hash_type: Raw hash type (SIGHASH_ALL, SIGHASH_NONE, etc.)

    Returns:
        Hash to sign, or uint256(1) when n_in (or the SIGHASH_SINGLE
        output) is out of range
    """
    preimage = signature_hash_preimage(script_code, tx_to, n_in, n_hash_type)
    if preimage is None:
        return uint256(SIGHASH_ONE_VALUE)
    return hash_to_uint256(double_sha256(preimage))


def sign_signature_hash(
    key: Key, script_code: Script, tx_to: Transaction, n_in: int, n_hash_type: int
) -> bytes:
    """Sign input n_in, returning the DER signature with the hash type byte appended"""
    hash_sig = signature_hash(script_code, tx_to, n_in, n_hash_type)
    return key.sign(hash_sig) + bytes([n_hash_type & 0xFF])


def check_sig(
    vch_sig: bytes,
    vch_pubkey: bytes,
    script_code: Script,
    tx_to: Transaction,
    n_in: int,
    n_hash_type: int = 0,
) -> bool:
    """
    Check signature

    Args:
        vch_sig: Signature bytes, hash type byte last
        vch_pubkey: Uncompressed public key bytes
        script_code: Script code
        tx_to: Transaction being verified
        n_in: Input index
        n_hash_type: Hash type (0 means extract from signature)

    Returns:
        True if signature is valid
    """
    if not vch_sig:
        return False

    # Hash type is one byte tacked on to the end of the signature
    if n_hash_type == 0:
        n_hash_type = vch_sig[-1]
    elif n_hash_type != vch_sig[-1]:
        return False
    vch_sig = vch_sig[:-1]

    hash_sig = signature_hash(script_code, tx_to, n_in, n_hash_type)
    return Key.verify_static(vch_pubkey, hash_sig, vch_sig)
