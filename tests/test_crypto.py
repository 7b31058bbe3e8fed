"""
Tests for hashing and signing signature hashes
"""

import hashlib

from .context import sighash
from sighash.script import OP_1, OP_CHECKSIG


def make_tx():
    tx = sighash.Transaction()
    tx.vin.append(sighash.TxIn(sighash.OutPoint(sighash.uint256(b"\x33" * 32), 0)))
    tx.vout.append(sighash.TxOut(50 * sighash.COIN, sighash.Script([OP_1])))
    return tx


def test_double_sha256():
    """Test double SHA256 against hashlib"""
    data = b"hello"
    expected = hashlib.sha256(hashlib.sha256(data).digest()).digest()
    assert sighash.double_sha256(data) == expected
    assert sighash.sha256(data) == hashlib.sha256(data).digest()


def test_key_sign_verify():
    """Test a key verifies its own signature over a signature hash"""
    key = sighash.Key()
    key.generate_new_key()
    assert len(key.get_pubkey()) == 65

    hash_sig = sighash.signature_hash(sighash.Script([OP_CHECKSIG]), make_tx(), 0, sighash.SIGHASH_ALL)
    sig = key.sign(hash_sig)
    assert key.verify(hash_sig, sig)
    assert sighash.Key.verify_static(key.get_pubkey(), hash_sig, sig)
    assert not key.verify(sighash.uint256(1), sig)


def test_key_from_privkey():
    """Test restoring a key from its private bytes"""
    key = sighash.Key()
    key.generate_new_key()

    key2 = sighash.Key()
    assert key2.set_privkey(key.get_privkey())
    assert key2.get_pubkey() == key.get_pubkey()

    assert not sighash.Key().set_privkey(b"\x01")
    assert not sighash.Key().set_pubkey(b"\x02" + bytes(32))


def test_signature_commits_to_outputs():
    """Test a SIGHASH_ALL signature stops verifying once an output changes"""
    key = sighash.Key()
    key.generate_new_key()
    script_code = sighash.Script([OP_CHECKSIG])
    tx = make_tx()

    sig = sighash.sign_signature_hash(key, script_code, tx, 0, sighash.SIGHASH_ALL)
    assert sig[-1] == sighash.SIGHASH_ALL
    assert sighash.check_sig(sig, key.get_pubkey(), script_code, tx, 0)

    tx.vout[0].value -= 1
    assert not sighash.check_sig(sig, key.get_pubkey(), script_code, tx, 0)


def test_signature_none_ignores_outputs():
    """Test a SIGHASH_NONE signature survives output changes"""
    key = sighash.Key()
    key.generate_new_key()
    script_code = sighash.Script([OP_CHECKSIG])
    tx = make_tx()

    sig = sighash.sign_signature_hash(key, script_code, tx, 0, sighash.SIGHASH_NONE)
    tx.vout[0].value -= 1
    tx.vout.append(sighash.TxOut(1, sighash.Script([OP_1])))
    assert sighash.check_sig(sig, key.get_pubkey(), script_code, tx, 0)
    # An explicit hash type must match the one in the signature
    assert not sighash.check_sig(sig, key.get_pubkey(), script_code, tx, 0, sighash.SIGHASH_ALL)
    assert not sighash.check_sig(b"", key.get_pubkey(), script_code, tx, 0)


def test_signature_anyonecanpay_allows_new_inputs():
    """Test ANYONECANPAY lets other inputs be added after signing"""
    key = sighash.Key()
    key.generate_new_key()
    script_code = sighash.Script([OP_CHECKSIG])
    tx = make_tx()

    n_hash_type = sighash.SIGHASH_ALL | sighash.SIGHASH_ANYONECANPAY
    sig = sighash.sign_signature_hash(key, script_code, tx, 0, n_hash_type)
    tx.vin.append(sighash.TxIn(sighash.OutPoint(sighash.uint256(b"\x44" * 32), 1)))
    assert sighash.check_sig(sig, key.get_pubkey(), script_code, tx, 0)
