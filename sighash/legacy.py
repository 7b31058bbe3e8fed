"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Reference signature hash: builds a blanked-out copy of the transaction
and hashes its plain serialization. Kept as the yardstick the streaming
implementation in sighash.signature is checked against.
"""

import copy
import struct

from sighash.crypto import double_sha256, hash_to_uint256
from sighash.script import OP_CODESEPARATOR, Script
from sighash.serialize import SER_GETHASH, DataStream
from sighash.signature import (
    SIGHASH_ANYONECANPAY,
    SIGHASH_NONE,
    SIGHASH_ONE_VALUE,
    SIGHASH_SINGLE,
)
from sighash.transaction import Transaction
from sighash.uint256 import uint256
from sighash.util import error, to_int32


def signature_hash_legacy(
    script_code: Script, tx_to: Transaction, n_in: int, n_hash_type: int
) -> uint256:
    if not 0 <= n_in < len(tx_to.vin):
        error("SignatureHash() : nIn=%d out of range", n_in)
        return uint256(SIGHASH_ONE_VALUE)
    tx_tmp = copy.deepcopy(tx_to)

    # In case concatenating two scripts ends up with two codeseparators,
    # or an extra one at the end, this prevents all those possible incompatibilities.
    script_code = script_code.copy()
    script_code.find_and_delete(Script([OP_CODESEPARATOR]))

    # Blank out other inputs' signatures
    for txin in tx_tmp.vin:
        txin.script_sig = Script()
    tx_tmp.vin[n_in].script_sig = script_code

    # Blank out some of the outputs
    if (n_hash_type & 0x1F) == SIGHASH_NONE:
        # Wildcard payee
        tx_tmp.vout.clear()

        # Let the others update at will
        for i, txin in enumerate(tx_tmp.vin):
            if i != n_in:
                txin.sequence = 0
    elif (n_hash_type & 0x1F) == SIGHASH_SINGLE:
        # Only lock in the txout payee at same index as txin
        n_out = n_in
        if n_out >= len(tx_tmp.vout):
            error("SignatureHash() : nOut=%d out of range", n_out)
            return uint256(SIGHASH_ONE_VALUE)
        del tx_tmp.vout[n_out + 1 :]
        for txout in tx_tmp.vout[:n_out]:
            txout.set_null()

        # Let the others update at will
        for i, txin in enumerate(tx_tmp.vin):
            if i != n_in:
                txin.sequence = 0

    # Blank out other inputs completely, not recommended for open transactions
    if n_hash_type & SIGHASH_ANYONECANPAY:
        tx_tmp.vin = [tx_tmp.vin[n_in]]

    # Serialize and hash
    stream = DataStream(SER_GETHASH)
    tx_tmp.serialize(stream, SER_GETHASH)
    stream.write(struct.pack("<i", to_int32(n_hash_type)))
    return hash_to_uint256(double_sha256(stream.get_bytes()))
