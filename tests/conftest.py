import os

import pytest

from .context import sighash

# Seed and trial count for the randomized tests, overridable so a
# failing run can be replayed or a longer soak run
SIGHASH_SEED = int(os.environ.get("SIGHASH_SEED", sighash.DEFAULT_SEED))
SIGHASH_TRIALS = int(os.environ.get("SIGHASH_TRIALS", sighash.DEFAULT_TRIALS))


@pytest.fixture
def seed():
    return SIGHASH_SEED


@pytest.fixture
def trials():
    return SIGHASH_TRIALS


@pytest.fixture
def generator(seed):
    return sighash.TxGenerator(seed)
