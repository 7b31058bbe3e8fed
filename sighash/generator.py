"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Deterministic random scripts and transactions for differential testing
"""

import random

from sighash.script import (
    OP_1,
    OP_2,
    OP_3,
    OP_CHECKSIG,
    OP_CODESEPARATOR,
    OP_FALSE,
    OP_IF,
    OP_RETURN,
    OP_VERIF,
    Script,
)
from sighash.signature import SIGHASH_BASE_MASK, SIGHASH_SINGLE
from sighash.transaction import SEQUENCE_FINAL, OutPoint, Transaction, TxIn, TxOut
from sighash.uint256 import uint256
from sighash.util import to_int32

DEFAULT_SEED = 0

# Opcodes random scripts are drawn from. OP_VERIF is reserved and
# OP_CODESEPARATOR exercises the stripping rule.
SCRIPT_OPCODES = (
    OP_FALSE,
    OP_1,
    OP_2,
    OP_3,
    OP_CHECKSIG,
    OP_IF,
    OP_VERIF,
    OP_RETURN,
    OP_CODESEPARATOR,
)

MAX_SCRIPT_OPS = 10
MAX_INPUTS = 4
MAX_OUTPUTS = 4
MAX_PREVOUT_N = 4
MAX_OUTPUT_VALUE = 100000000


class TxGenerator:
    """
    Source of random test inputs

    Owns its random state, so two generators built from the same seed
    produce the same scripts and transactions in the same order.
    """

    def __init__(self, seed=DEFAULT_SEED):
        self.seed = seed
        self.rng = random.Random(seed)

    def rand32(self) -> int:
        """Uniform unsigned 32-bit draw"""
        return self.rng.getrandbits(32)

    def random_hash(self) -> uint256:
        return uint256(self.rng.getrandbits(256).to_bytes(32, "little"))

    def random_hash_type(self) -> int:
        return to_int32(self.rand32())

    def random_script(self) -> Script:
        script = Script()
        ops = self.rand32() % MAX_SCRIPT_OPS
        for _ in range(ops):
            script.push_opcode(SCRIPT_OPCODES[self.rand32() % len(SCRIPT_OPCODES)])
        return script

    def random_transaction(self, single: bool = False) -> Transaction:
        """
        Draw a transaction with 1-4 inputs and 1-4 outputs

        With single set the output count equals the input count, so
        every input has an output for SIGHASH_SINGLE to commit to.
        """
        tx = Transaction()
        tx.version = to_int32(self.rand32())
        tx.lock_time = self.rand32() if self.rand32() % 2 else 0
        ins = self.rand32() % MAX_INPUTS + 1
        outs = ins if single else self.rand32() % MAX_OUTPUTS + 1

        for _ in range(ins):
            prevout = OutPoint(self.random_hash(), self.rand32() % MAX_PREVOUT_N)
            script_sig = self.random_script()
            sequence = self.rand32() if self.rand32() % 2 else SEQUENCE_FINAL
            tx.vin.append(TxIn(prevout, script_sig, sequence))

        for _ in range(outs):
            value = self.rand32() % MAX_OUTPUT_VALUE
            tx.vout.append(TxOut(value, self.random_script()))

        return tx

    def random_case(self):
        """
        Draw (script_code, tx, n_in, n_hash_type) for one signature hash

        The transaction has as many outputs as inputs whenever the hash
        type is SIGHASH_SINGLE, so n_in always has a matching output.
        """
        n_hash_type = self.random_hash_type()
        tx = self.random_transaction((n_hash_type & SIGHASH_BASE_MASK) == SIGHASH_SINGLE)
        script_code = self.random_script()
        n_in = self.rand32() % len(tx.vin)
        return script_code, tx, n_in, n_hash_type
