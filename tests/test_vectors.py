"""
Tests for fixed signature hash vectors
"""

import os

import pytest

from .context import DATA_DIR, sighash

ONE_HEX = "0" * 63 + "1"

TX_HEX = (
    "01000000"
    "01" + "11" * 32 + "00000000" + "00" + "ffffffff"
    "01" + "00e1f50500000000" + "0151"
    "00000000"
)


def duplicate_input_tx_hex():
    tx = sighash.Transaction.from_hex(TX_HEX)
    txin = tx.vin[0]
    tx.vin.append(sighash.TxIn(sighash.OutPoint(txin.prevout.hash, txin.prevout.n)))
    return tx.to_hex()


def test_bundled_vectors():
    """Test every entry in the bundled vector file"""
    entries = sighash.load_vectors(os.path.join(DATA_DIR, "sighash.json"))
    assert any(len(entry) == 5 and entry[4] != ONE_HEX for entry in entries)
    for engine in sighash.ENGINES.values():
        failures = sighash.validate_vectors(entries, engine)
        assert not failures, "\n".join(str(f) for f in failures)


def test_bundled_vector_digest():
    """Test a bundled entry passes check_vector with its real digest"""
    entries = sighash.load_vectors(os.path.join(DATA_DIR, "sighash.json"))
    cases = [sighash.parse_vector(entry) for entry in entries]
    cases = [case for case in cases if case is not None and case.expected_hex != ONE_HEX]
    assert len(cases) == 9
    for case in cases:
        assert sighash.vectors.check_vector(case) is None

    case = cases[0]
    case.tx.vout[0].value += 1
    assert "expected " + case.expected_hex in sighash.vectors.check_vector(case)


def test_generated_vectors(tmp_path, seed):
    """Test vectors recorded from the reference reproduce with the candidate"""
    entries = sighash.generate_vectors(
        sighash.TxGenerator(seed), 500, engine=sighash.signature_hash_legacy
    )
    path = tmp_path / "sighash.json"
    sighash.write_vectors(path, entries)

    loaded = sighash.load_vectors(path)
    assert loaded == entries
    assert len(loaded) == 501
    failures = sighash.validate_vectors(loaded, sighash.signature_hash)
    assert not failures, "\n".join(str(f) for f in failures)


def test_parse_vector_comment():
    """Test one element entries are comments"""
    assert sighash.parse_vector(["just a comment"]) is None


def test_parse_vector():
    """Test a real entry decodes"""
    entry = [TX_HEX, "AB51", 0, -1, ONE_HEX.upper()]
    case = sighash.parse_vector(entry)
    assert case.tx.to_hex() == TX_HEX
    assert case.script_code.data.hex() == "ab51"
    assert case.n_in == 0
    assert case.n_hash_type == -1
    assert case.expected_hex == ONE_HEX
    assert case.description == '["%s","AB51",0,-1,"%s"]' % (TX_HEX, ONE_HEX.upper())


def test_parse_vector_script_is_raw():
    """Test script bytes are taken as is, even when not a valid script"""
    case = sighash.parse_vector([TX_HEX, "4cff", 0, 1, ONE_HEX])
    assert case.script_code.data.hex() == "4cff"


@pytest.mark.parametrize(
    "entry",
    [
        [],
        "not a list",
        [TX_HEX, ""],
        [TX_HEX, "", 0, 1, ONE_HEX, "extra"],
        ["zz", "", 0, 1, ONE_HEX],
        [TX_HEX, "abc", 0, 1, ONE_HEX],
        [TX_HEX, "", "0", 1, ONE_HEX],
        [TX_HEX, "", 0, True, ONE_HEX],
        [TX_HEX, "", -1, 1, ONE_HEX],
        [TX_HEX, "", 0, 1, "01"],
        [TX_HEX[:-8], "", 0, 1, ONE_HEX],
    ],
)
def test_parse_vector_malformed(entry):
    """Test malformed entries raise VectorError"""
    with pytest.raises(sighash.VectorError):
        sighash.parse_vector(entry)


def test_validate_reports_and_continues(capsys):
    """Test bad entries are reported without stopping the run"""
    good = [TX_HEX, "", 1, 1, ONE_HEX]
    wrong_digest = [TX_HEX, "", 1, 1, "00" * 32]
    duplicate = [duplicate_input_tx_hex(), "", 5, 1, ONE_HEX]
    entries = [
        ["comment"],
        [],
        wrong_digest,
        ["zz", "", 0, 1, ONE_HEX],
        duplicate,
        good,
    ]

    failures = sighash.validate_vectors(entries)
    assert len(failures) == 4
    assert failures[0].reason == "Bad test"
    assert failures[1].description == sighash.vectors.describe_entry(wrong_digest)
    assert "expected " + "00" * 32 in failures[1].reason
    assert "not valid hex" in failures[2].reason
    assert failures[3].description == sighash.vectors.describe_entry(duplicate)
    assert "CheckTransaction" in failures[3].reason

    out = capsys.readouterr().out
    assert "duplicate inputs" in out
    assert "sighash vector failed" in out


def test_validate_with_other_engine():
    """Test the engine under test is selectable"""
    entries = sighash.generate_vectors(sighash.TxGenerator(3), 20)
    assert sighash.validate_vectors(entries, sighash.ENGINES["reference"]) == []


def test_load_vectors_rejects_non_array(tmp_path):
    """Test a vector file must hold an array"""
    path = tmp_path / "bad.json"
    path.write_text('{"a": 1}')
    with pytest.raises(sighash.VectorError):
        sighash.load_vectors(path)
