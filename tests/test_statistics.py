"""Tests for the alphabet, reference distribution and frequency counter."""

import math

import pytest

from app.core.exceptions import InvalidReferenceError, InvalidSymbolError, NoSignalError
from app.services.analysis.reference import ENGLISH_FREQ, ENGLISH_REFERENCE, ReferenceDistribution
from app.services.analysis.statistics import FrequencyCounter
from app.services.preprocessing.alphabet import (
    ENGLISH_ALPHABET,
    Alphabet,
    letter_to_ordinal,
    ordinal_to_letter,
)


class TestAlphabet:
    """Test suite for the letter <-> ordinal mapping."""

    def test_letter_to_ordinal_is_case_insensitive(self):
        assert letter_to_ordinal("a") == 0
        assert letter_to_ordinal("A") == 0
        assert letter_to_ordinal("z") == 25
        assert letter_to_ordinal("M") == 12

    @pytest.mark.parametrize("symbol", ["", "1", " ", "é", "ab", "?", None, 3])
    def test_letter_to_ordinal_rejects_non_letters(self, symbol):
        with pytest.raises(InvalidSymbolError):
            letter_to_ordinal(symbol)

    def test_ordinal_to_letter_case_hint(self):
        assert ordinal_to_letter(0) == "A"
        assert ordinal_to_letter(0, uppercase=False) == "a"
        assert ordinal_to_letter(25, uppercase=False) == "z"

    @pytest.mark.parametrize("ordinal", [-1, 26])
    def test_ordinal_to_letter_out_of_range(self, ordinal):
        with pytest.raises(InvalidSymbolError):
            ordinal_to_letter(ordinal)

    def test_bijection(self):
        for ordinal in range(26):
            assert letter_to_ordinal(ordinal_to_letter(ordinal)) == ordinal

    def test_lookup_returns_none_for_non_letters(self):
        assert ENGLISH_ALPHABET.lookup("q") == 16
        assert ENGLISH_ALPHABET.lookup("!") is None
        assert ENGLISH_ALPHABET.lookup("ı") is None

    def test_duplicate_letters_rejected(self):
        with pytest.raises(ValueError):
            Alphabet("ABCA")


class TestReferenceDistribution:
    """Test suite for reference distributions."""

    def test_english_sums_to_one(self):
        assert math.isclose(sum(ENGLISH_REFERENCE.values), 1.0, abs_tol=1e-9)
        assert len(ENGLISH_REFERENCE) == 26

    def test_english_preserves_ranking(self):
        ranked = sorted(ENGLISH_FREQ, key=ENGLISH_FREQ.get, reverse=True)
        assert ranked[0] == "E"
        assert ENGLISH_REFERENCE.frequency("e") > ENGLISH_REFERENCE.frequency("t")
        assert ENGLISH_REFERENCE.frequency("Z") == pytest.approx(0.07 / 99.82)

    def test_rotated(self):
        rotated = ENGLISH_REFERENCE.rotated(1)
        assert rotated[1] == ENGLISH_REFERENCE.frequency("A")
        assert rotated[0] == ENGLISH_REFERENCE.frequency("Z")

    def test_read_only_view(self):
        view = ENGLISH_REFERENCE.as_dict()
        with pytest.raises(TypeError):
            view["E"] = 1.0

    def test_missing_letter_rejected(self):
        frequencies = dict(ENGLISH_REFERENCE.as_dict())
        del frequencies["Q"]
        with pytest.raises(InvalidReferenceError):
            ReferenceDistribution(frequencies)

    def test_bad_sum_rejected(self):
        with pytest.raises(InvalidReferenceError):
            ReferenceDistribution({letter: 0.5 for letter in ENGLISH_ALPHABET})

    def test_non_letter_key_rejected(self):
        frequencies = dict(ENGLISH_REFERENCE.as_dict())
        frequencies["1"] = 0.0
        with pytest.raises(InvalidReferenceError):
            ReferenceDistribution(frequencies)

    def test_negative_value_rejected(self):
        frequencies = {letter: 1 / 25 for letter in ENGLISH_ALPHABET}
        frequencies["A"] = -frequencies["A"]
        with pytest.raises(InvalidReferenceError):
            ReferenceDistribution(frequencies, tolerance=1.0)

    def test_lowercase_keys_accepted(self):
        uniform = ReferenceDistribution({letter.lower(): 1 / 26 for letter in ENGLISH_ALPHABET})
        assert uniform.frequency("k") == pytest.approx(1 / 26)


class TestFrequencyCounter:
    """Test suite for letter counting."""

    @pytest.fixture
    def counter(self):
        return FrequencyCounter()

    def test_counts_ignore_case_and_non_letters(self, counter):
        table = counter.count("AaB, b! c 123")

        assert table.count("a") == 2
        assert table.count("B") == 2
        assert table.count("c") == 1
        assert table.total == 5

    def test_all_letters_present(self, counter):
        table = counter.count("hello")
        counts = table.as_dict()

        assert len(counts) == 26
        assert counts["z"] == 0
        assert counts["l"] == 2

    def test_get_returns_none_for_non_letters(self, counter):
        table = counter.count("abc")
        assert table.get("a") == 1
        assert table.get("q") == 0
        assert table.get("#") is None

    def test_count_sum_equals_letters(self, counter, long_plaintext):
        table = counter.count(long_plaintext)
        letters = sum(1 for c in long_plaintext if c.isascii() and c.isalpha())

        assert sum(table.counts) == letters
        assert table.total == letters

    def test_proportions_sum_to_one(self, counter, long_plaintext):
        table = counter.count(long_plaintext)
        assert math.isclose(sum(table.proportions()), 1.0, abs_tol=1e-9)
        assert table.proportion("e") == table.count("e") / table.total

    def test_idempotent(self, counter, long_plaintext):
        assert counter.count(long_plaintext) == counter.count(long_plaintext)

    def test_empty_text(self, counter):
        table = counter.count("")

        assert table.total == 0
        assert all(count == 0 for count in table.counts)
        with pytest.raises(NoSignalError):
            table.proportions()
        with pytest.raises(NoSignalError):
            table.proportion("a")

    def test_no_signal_reports_scanned_length(self, counter):
        table = counter.count("12345 !!")

        assert table.scanned == 8
        with pytest.raises(NoSignalError) as exc_info:
            table.proportions()
        assert exc_info.value.details == {"length": 8}

    def test_tutorial_counts(self, counter, tutorial_ciphertext):
        table = counter.count(tutorial_ciphertext)

        assert table.as_dict() == {
            "a": 7, "b": 8, "c": 16, "d": 10, "e": 8, "f": 0, "g": 16,
            "h": 5, "i": 13, "j": 8, "k": 2, "l": 1, "m": 0, "n": 2,
            "o": 1, "p": 19, "q": 3, "r": 8, "s": 6, "t": 17, "u": 5,
            "v": 11, "w": 4, "x": 17, "y": 1, "z": 0,
        }

    def test_most_common(self, counter):
        table = counter.count("bbaac")
        assert table.most_common(3) == [("A", 2), ("B", 2), ("C", 1)]

    def test_profile(self, counter, long_plaintext):
        stats = counter.profile(long_plaintext)

        # IOC should be close to English (~0.0667)
        assert 0.05 < stats.index_of_coincidence < 0.08
        assert stats.character_frequencies[0].character == "E"
        assert 3.5 < stats.entropy < 4.5

    def test_profile_uniform_text(self, counter):
        stats = counter.profile("ABCDEFGHIJKLMNOPQRSTUVWXYZ" * 10)

        # IOC should be close to random (1/26 ≈ 0.0385)
        assert stats.index_of_coincidence < 0.05
        assert stats.entropy == pytest.approx(math.log2(26))

    def test_profile_empty(self, counter):
        stats = counter.profile("!!!")

        assert stats.length == 0
        assert stats.index_of_coincidence == 0.0
        assert all(f.frequency == 0.0 for f in stats.character_frequencies)
