from pathlib import Path

import pytest

from Tree_Digest.core.algorithms import SHA256, SHA512
from Tree_Digest.core.errors import UnsupportedAlgorithm
from Tree_Digest.core.models import HashSettings, ResultEntry


def test_result_entry_line():
    entry = ResultEntry(Path("input/bar"), "abcd", is_directory=True)

    assert entry.line() == "input/bar: abcd"
    assert entry.is_directory


def test_hash_settings_defaults():
    settings = HashSettings()

    assert settings.algorithm is SHA512
    assert settings.buffer_size == 8192


def test_hash_settings_resolves_names():
    assert HashSettings(algorithm="SHA-256").algorithm is SHA256


@pytest.mark.parametrize("size", [0, -5, "8192", True])
def test_hash_settings_rejects_bad_buffer(size):
    with pytest.raises(ValueError):
        HashSettings(buffer_size=size)


def test_hash_settings_rejects_unknown_algorithm():
    with pytest.raises(UnsupportedAlgorithm):
        HashSettings(algorithm="nope")
