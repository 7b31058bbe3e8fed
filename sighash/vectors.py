"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Fixed test vectors for the signature hash

A vector file is a JSON array. Each entry is either a one-element
comment or
    [raw_tx_hex, raw_script_hex, n_in, hash_type, expected_sighash_hex]
where expected_sighash_hex is in display (byte-reversed) order.
"""

import json
from typing import List, Optional

from sighash.generator import TxGenerator
from sighash.script import Script
from sighash.signature import SignatureHasher, signature_hash
from sighash.transaction import Transaction
from sighash.util import error

VECTOR_HEADER = [
    "raw_transaction, script, input_index, hashType, signature_hash (result)"
]


class VectorError(ValueError):
    """A vector entry that cannot be turned into a test case"""


class VectorCase:
    """A decoded vector entry"""

    def __init__(
        self,
        description: str,
        tx: Transaction,
        script_code: Script,
        n_in: int,
        n_hash_type: int,
        expected_hex: str,
    ):
        self.description = description
        self.tx = tx
        self.script_code = script_code
        self.n_in = n_in
        self.n_hash_type = n_hash_type
        self.expected_hex = expected_hex

    def __repr__(self):
        return f"VectorCase({self.description})"


class VectorFailure:
    """A vector entry that did not check out, and why"""

    def __init__(self, description: str, reason: str):
        self.description = description
        self.reason = reason

    def __str__(self):
        return f"{self.reason}: {self.description}"

    def __repr__(self):
        return f"VectorFailure({self})"


def describe_entry(entry) -> str:
    return json.dumps(entry, separators=(",", ":"))


def load_vectors(path) -> list:
    """Read a vector file; entries are returned unparsed"""
    with open(path, "r", encoding="utf-8") as fh:
        entries = json.load(fh)
    if not isinstance(entries, list):
        raise VectorError("vector file must hold a JSON array: %s" % path)
    return entries


def _decode_hex(value, field: str) -> bytes:
    if not isinstance(value, str):
        raise VectorError(f"{field} must be a hex string")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise VectorError(f"{field} is not valid hex: {e}") from e


def _require_int(value, field: str) -> int:
    # bool is an int subclass, but never a valid index or hash type
    if isinstance(value, bool) or not isinstance(value, int):
        raise VectorError(f"{field} must be an integer")
    return value


def parse_vector(entry) -> Optional[VectorCase]:
    """
    Decode one entry. Comments give None; anything malformed raises
    VectorError.
    """
    if not isinstance(entry, list) or len(entry) < 1:
        raise VectorError("Bad test")
    if len(entry) == 1:
        return None
    if len(entry) != 5:
        raise VectorError("expected 5 fields, got %d" % len(entry))

    description = describe_entry(entry)
    raw_tx = _decode_hex(entry[0], "raw_transaction")
    raw_script = _decode_hex(entry[1], "script")
    n_in = _require_int(entry[2], "input_index")
    n_hash_type = _require_int(entry[3], "hashType")
    expected = _decode_hex(entry[4], "signature_hash")
    if len(expected) != 32:
        raise VectorError("signature_hash must be 32 bytes")
    if n_in < 0:
        raise VectorError("input_index must not be negative")

    try:
        tx = Transaction.from_bytes(raw_tx)
    except ValueError as e:
        raise VectorError(f"raw_transaction does not decode: {e}") from e

    # Script bytes are taken verbatim, not parsed
    script_code = Script()
    script_code += raw_script

    return VectorCase(description, tx, script_code, n_in, n_hash_type, expected.hex())


def check_vector(case: VectorCase, engine: SignatureHasher = signature_hash) -> Optional[str]:
    """Return the reason case fails, or None if it passes"""
    if not case.tx.check_transaction():
        return "transaction fails CheckTransaction"

    sighash = engine(case.script_code, case.tx, case.n_in, case.n_hash_type)
    if sighash.get_hex() != case.expected_hex:
        return "signature hash %s, expected %s" % (sighash.get_hex(), case.expected_hex)
    return None


def validate_vectors(entries, engine: SignatureHasher = signature_hash) -> List[VectorFailure]:
    """
    Check every entry against engine

    A bad entry is recorded and the remaining entries are still checked.
    """
    failures = []
    for entry in entries:
        try:
            case = parse_vector(entry)
        except VectorError as e:
            failures.append(VectorFailure(describe_entry(entry), str(e)))
            continue
        if case is None:
            continue

        reason = check_vector(case, engine)
        if reason is not None:
            failures.append(VectorFailure(case.description, reason))

    for failure in failures:
        error("sighash vector failed, %s", failure)
    return failures


def generate_vectors(
    generator: TxGenerator, count: int, engine: SignatureHasher = signature_hash
) -> list:
    """
    Draw count random cases and record engine's digest for each

    Cases are drawn the same way as differential trials, so every
    transaction also passes CheckTransaction.
    """
    entries = [list(VECTOR_HEADER)]
    for _ in range(count):
        script_code, tx, n_in, n_hash_type = generator.random_case()
        sighash = engine(script_code, tx, n_in, n_hash_type)
        entries.append(
            [tx.to_hex(), script_code.data.hex(), n_in, n_hash_type, sighash.get_hex()]
        )
    return entries


def write_vectors(path, entries):
    """Write entries as a JSON array, one entry per line"""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("[\n")
        fh.write(",\n".join(describe_entry(entry) for entry in entries))
        fh.write("\n]\n")
