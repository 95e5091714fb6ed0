"""Shared fixtures and test environment."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402


@pytest.fixture
def long_plaintext():
    """Natural English prose, well over 500 letters."""
    return (
        "Cryptography is the study of secure communication in the presence "
        "of adversaries. Long before computers existed, people invented ciphers "
        "to hide meaning from unauthorized readers. Some methods relied on simple "
        "substitution, while others used transposition or periodic keys. The "
        "Caesar cipher is among the oldest of these schemes: every letter of the "
        "message is replaced by the letter a fixed number of places further down "
        "the alphabet. Because the same shift is applied everywhere, the relative "
        "frequency of each letter survives encryption unchanged. In ordinary "
        "English the letter E is the most common, followed by T, A and O, so an "
        "analyst who counts the letters of an intercepted message can usually "
        "guess the shift at a glance. With only twenty six possible keys, the "
        "cipher offers no real protection today, yet it remains a wonderful way "
        "to introduce the ideas of keys, statistics and careful reasoning that "
        "still guide the work of modern codebreakers."
    )


@pytest.fixture
def tutorial_ciphertext():
    """Ciphertext from the frequency analysis exercise (shift 15)."""
    return (
        "radyjgtxhpsncpbxrvtctgpaejgedhtegdvgpbbxcvapcvjpvtrdbqxcxcv"
        "iwtpeegdprwpqxaxinpcsxcitgprixktstktadebtciduphrgxeixcvapcv"
        "jpvtlxiwpctuuxrxtcipcsgdqjhixcugphigjrijgtudgbjaixiwgtpstse"
        "gdvgpbbxcvo"
    )
