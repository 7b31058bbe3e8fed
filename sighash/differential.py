"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Differential testing of two signature hash implementations
"""

import json
from typing import List, Optional

from sighash.generator import DEFAULT_SEED, TxGenerator
from sighash.legacy import signature_hash_legacy
from sighash.script import Script
from sighash.signature import SignatureHasher, signature_hash
from sighash.transaction import Transaction
from sighash.uint256 import uint256
from sighash.util import error

DEFAULT_TRIALS = 50000

ENGINES = {
    "reference": signature_hash_legacy,
    "candidate": signature_hash,
}


class Mismatch:
    """One trial where the two implementations disagreed, with its inputs"""

    def __init__(
        self,
        trial: int,
        tx: Transaction,
        script_code: Script,
        n_in: int,
        n_hash_type: int,
        expected: uint256,
        actual: uint256,
    ):
        self.trial = trial
        self.tx = tx
        self.script_code = script_code
        self.n_in = n_in
        self.n_hash_type = n_hash_type
        self.expected = expected
        self.actual = actual

    def as_vector(self) -> list:
        """The failing case as a vector entry carrying the reference digest"""
        return [
            self.tx.to_hex(),
            self.script_code.data.hex(),
            self.n_in,
            self.n_hash_type,
            self.expected.get_hex(),
        ]

    def describe(self) -> str:
        return "trial %d: %s reference=%s candidate=%s" % (
            self.trial,
            json.dumps(self.as_vector(), separators=(",", ":")),
            self.expected.get_hex(),
            self.actual.get_hex(),
        )

    def __repr__(self):
        return f"Mismatch({self.describe()})"


def run_trial(
    generator: TxGenerator,
    reference: SignatureHasher,
    candidate: SignatureHasher,
    trial: int = 0,
) -> Optional[Mismatch]:
    """Draw one set of inputs, hash with both implementations and compare"""
    script_code, tx, n_in, n_hash_type = generator.random_case()

    expected = reference(script_code, tx, n_in, n_hash_type)
    actual = candidate(script_code, tx, n_in, n_hash_type)
    if expected == actual:
        return None
    return Mismatch(trial, tx, script_code, n_in, n_hash_type, expected, actual)


def compare_engines(
    reference: SignatureHasher = signature_hash_legacy,
    candidate: SignatureHasher = signature_hash,
    trials: int = DEFAULT_TRIALS,
    generator: Optional[TxGenerator] = None,
    seed=DEFAULT_SEED,
) -> List[Mismatch]:
    """
    Run trials random cases through both implementations

    Every mismatch is reported through error() and returned; the run
    does not stop at the first one. A generator passed in is advanced in
    place, otherwise a fresh one is seeded with seed.
    """
    if generator is None:
        generator = TxGenerator(seed)

    mismatches = []
    for trial in range(trials):
        mismatch = run_trial(generator, reference, candidate, trial)
        if mismatch is not None:
            error("SignatureHash mismatch, %s", mismatch.describe())
            mismatches.append(mismatch)
    return mismatches
