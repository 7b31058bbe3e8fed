"""
Tests for the random transaction generator
"""

from .context import sighash
from sighash.generator import SCRIPT_OPCODES


def test_same_seed_same_stream():
    """Test two generators with one seed draw identical cases"""
    gen1 = sighash.TxGenerator(1234)
    gen2 = sighash.TxGenerator(1234)
    for _ in range(20):
        script1, tx1, n_in1, type1 = gen1.random_case()
        script2, tx2, n_in2, type2 = gen2.random_case()
        assert tx1.to_hex() == tx2.to_hex()
        assert script1 == script2
        assert (n_in1, type1) == (n_in2, type2)


def test_different_seeds_differ():
    """Test different seeds give different transactions"""
    tx1 = sighash.TxGenerator(1).random_transaction()
    tx2 = sighash.TxGenerator(2).random_transaction()
    assert tx1.to_hex() != tx2.to_hex()


def test_generators_are_independent():
    """Test drawing from one generator does not move another"""
    gen1 = sighash.TxGenerator(7)
    gen2 = sighash.TxGenerator(7)
    gen1.random_transaction()
    reference = sighash.TxGenerator(7).random_transaction()
    assert gen2.random_transaction().to_hex() == reference.to_hex()


def test_random_script_shape(generator):
    """Test scripts hold 0-9 opcodes from the palette"""
    lengths = set()
    for _ in range(500):
        script = generator.random_script()
        assert len(script) <= 9
        assert all(op in SCRIPT_OPCODES for op in script.data)
        lengths.add(len(script))
    assert lengths == set(range(10))


def test_random_transaction_shape(generator):
    """Test counts, prevout indexes, sequences and values are in range"""
    for _ in range(200):
        tx = generator.random_transaction()
        assert 1 <= len(tx.vin) <= 4
        assert 1 <= len(tx.vout) <= 4
        assert -(2**31) <= tx.version < 2**31
        assert 0 <= tx.lock_time <= 0xFFFFFFFF
        for txin in tx.vin:
            assert 0 <= txin.prevout.n <= 3
            assert 0 <= txin.sequence <= 0xFFFFFFFF
        for txout in tx.vout:
            assert 0 <= txout.value < 100000000
        assert tx.check_transaction()


def test_random_transaction_single_counts(generator):
    """Test single forces as many outputs as inputs"""
    for _ in range(100):
        tx = generator.random_transaction(single=True)
        assert len(tx.vin) == len(tx.vout)


def test_random_case_single_has_output(generator):
    """Test SIGHASH_SINGLE cases always have an output at n_in"""
    for _ in range(500):
        script_code, tx, n_in, n_hash_type = generator.random_case()
        assert 0 <= n_in < len(tx.vin)
        if sighash.HashType(n_hash_type).is_single:
            assert n_in < len(tx.vout)


def test_lock_time_and_sequence_defaults_occur(generator):
    """Test the zero lock time and final sequence branches are both drawn"""
    lock_times = []
    sequences = []
    for _ in range(200):
        tx = generator.random_transaction()
        lock_times.append(tx.lock_time)
        sequences.extend(txin.sequence for txin in tx.vin)
    assert 0 in lock_times
    assert any(lock_time != 0 for lock_time in lock_times)
    assert 0xFFFFFFFF in sequences
    assert any(sequence != 0xFFFFFFFF for sequence in sequences)
