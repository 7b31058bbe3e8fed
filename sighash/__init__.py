"""
Sighash - legacy transaction signature hash

The signature hash a transaction signature commits to, a second
implementation to check it against, and the random and fixed-vector
harness that shows the two agree.
"""

__version__ = "0.1.0"

from sighash.crypto import Key, double_sha256, hash_to_uint256, sha256
from sighash.differential import DEFAULT_TRIALS, ENGINES, Mismatch, compare_engines, run_trial
from sighash.generator import DEFAULT_SEED, TxGenerator
from sighash.legacy import signature_hash_legacy
from sighash.script import OP_CODESEPARATOR, Script
from sighash.serialize import (
    DataStream,
    get_size_of_compact_size,
    read_compact_size,
    write_compact_size,
)
from sighash.signature import (
    SIGHASH_ALL,
    SIGHASH_ANYONECANPAY,
    SIGHASH_NONE,
    SIGHASH_ONE_VALUE,
    SIGHASH_SINGLE,
    HashType,
    SignatureHasher,
    SignatureSerializer,
    check_sig,
    sign_signature_hash,
    signature_hash,
    signature_hash_preimage,
)
from sighash.transaction import (
    COIN,
    MAX_BLOCK_SIZE,
    MAX_MONEY,
    OutPoint,
    Transaction,
    TxIn,
    TxOut,
)
from sighash.uint256 import uint256
from sighash.util import error
from sighash.vectors import (
    VectorCase,
    VectorError,
    VectorFailure,
    generate_vectors,
    load_vectors,
    parse_vector,
    validate_vectors,
    write_vectors,
)

__all__ = [
    # Crypto
    "Key",
    "double_sha256",
    "hash_to_uint256",
    "sha256",
    # Serialize
    "DataStream",
    "get_size_of_compact_size",
    "read_compact_size",
    "write_compact_size",
    # Script
    "OP_CODESEPARATOR",
    "Script",
    # Transaction
    "COIN",
    "MAX_BLOCK_SIZE",
    "MAX_MONEY",
    "OutPoint",
    "Transaction",
    "TxIn",
    "TxOut",
    # Uint256
    "uint256",
    # Signature hash
    "SIGHASH_ALL",
    "SIGHASH_ANYONECANPAY",
    "SIGHASH_NONE",
    "SIGHASH_ONE_VALUE",
    "SIGHASH_SINGLE",
    "HashType",
    "SignatureHasher",
    "SignatureSerializer",
    "check_sig",
    "sign_signature_hash",
    "signature_hash",
    "signature_hash_legacy",
    "signature_hash_preimage",
    # Generator
    "DEFAULT_SEED",
    "TxGenerator",
    # Differential
    "DEFAULT_TRIALS",
    "ENGINES",
    "Mismatch",
    "compare_engines",
    "run_trial",
    # Vectors
    "VectorCase",
    "VectorError",
    "VectorFailure",
    "generate_vectors",
    "load_vectors",
    "parse_vector",
    "validate_vectors",
    "write_vectors",
    # Util
    "error",
]
