"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Cryptographic functions: SHA256, ECDSA
"""

import hashlib

from ecdsa import BadSignatureError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.keys import MalformedPointError
from ecdsa.util import sigdecode_der, sigencode_der

from sighash.uint256 import uint256


def sha256(data: bytes) -> bytes:
    """Single SHA256 hash"""
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """Double SHA256 hash (Bitcoin hash)"""
    return sha256(sha256(data))


def hash_to_uint256(data: bytes) -> uint256:
    """Convert hash bytes to uint256"""
    if len(data) != 32:
        raise ValueError("Hash must be 32 bytes")
    return uint256(data)


class Key:
    """ECDSA key over secp256k1"""

    def __init__(self):
        self._key = None
        self._pubkey = None

    def generate_new_key(self):
        """Generate a new key pair"""
        self._key = SigningKey.generate(curve=SECP256k1)
        self._pubkey = self._key.get_verifying_key()

    def get_pubkey(self) -> bytes:
        """Get public key as bytes"""
        if self._pubkey is None:
            raise ValueError("No public key")
        # Uncompressed public keys (65 bytes: 0x04 + 64 bytes)
        return b"\x04" + self._pubkey.to_string()

    def get_privkey(self) -> bytes:
        """Get private key as bytes"""
        if self._key is None:
            raise ValueError("No private key")
        return self._key.to_string()

    def set_privkey(self, privkey: bytes) -> bool:
        """Set private key from bytes"""
        try:
            self._key = SigningKey.from_string(privkey, curve=SECP256k1)
        except (ValueError, MalformedPointError):
            return False
        self._pubkey = self._key.get_verifying_key()
        return True

    def set_pubkey(self, pubkey: bytes) -> bool:
        """Set public key from uncompressed bytes"""
        if len(pubkey) != 65 or pubkey[0] != 0x04:
            return False
        try:
            self._pubkey = VerifyingKey.from_string(pubkey[1:], curve=SECP256k1)
        except MalformedPointError:
            return False
        return True

    def sign(self, hash_value: uint256) -> bytes:
        """Sign a signature hash, DER encoded"""
        if self._key is None:
            raise ValueError("No private key")
        return self._key.sign_digest(hash_value.to_bytes(), sigencode=sigencode_der)

    def verify(self, hash_value: uint256, sig: bytes) -> bool:
        """Verify a DER signature over a signature hash"""
        if self._pubkey is None:
            return False
        try:
            return self._pubkey.verify_digest(sig, hash_value.to_bytes(), sigdecode=sigdecode_der)
        except BadSignatureError:
            return False

    @staticmethod
    def verify_static(pubkey: bytes, hash_value: uint256, sig: bytes) -> bool:
        """Static method to verify signature"""
        key = Key()
        if not key.set_pubkey(pubkey):
            return False
        return key.verify(hash_value, sig)
