"""Tests for shift scoring and key selection."""

import logging

import pytest

from app.core.exceptions import NoSignalError
from app.models.schemas import ScoringMethod
from app.services.analysis.reference import ENGLISH_REFERENCE, ReferenceDistribution
from app.services.analysis.statistics import FrequencyCounter
from app.services.engines.monoalphabetic.caesar import CaesarEngine
from app.services.optimization.scoring import ShiftScorer
from app.services.optimization.selection import KeySelector
from app.services.preprocessing.alphabet import ENGLISH_ALPHABET


def _reference(**masses):
    frequencies = {letter: 0.0 for letter in ENGLISH_ALPHABET}
    frequencies.update({letter.upper(): value for letter, value in masses.items()})
    return ReferenceDistribution(frequencies)


class TestShiftScorer:
    """Test suite for the per-shift statistic."""

    @pytest.fixture
    def counter(self):
        return FrequencyCounter()

    def test_perfect_match_scores_zero(self, counter):
        reference = _reference(a=0.5, b=0.5)
        observed = counter.count("ab")

        assert ShiftScorer().score(observed, reference, 0) == pytest.approx(0.0)

    def test_rotation_direction(self, counter):
        # Reference mass on A; ciphertext letter D means shift 3
        reference = _reference(a=1.0)
        observed = counter.count("ddd")
        scorer = ShiftScorer()

        assert scorer.score(observed, reference, 3) == pytest.approx(0.0)
        assert scorer.score(observed, reference, 2) > 1.0

    def test_floor_avoids_division_by_zero(self, counter):
        reference = _reference(a=1.0)
        observed = counter.count("b")

        score = ShiftScorer(floor=1e-6).score(observed, reference, 0)
        assert score == pytest.approx(1 / 1e-6 + 1 / (1 + 1e-6))

    def test_score_all_covers_every_shift(self, counter, long_plaintext):
        observed = counter.count(long_plaintext)

        scores = ShiftScorer().score_all(observed, ENGLISH_REFERENCE)

        assert [s.shift for s in scores] == list(range(26))

    def test_parallel_matches_sequential(self, counter, long_plaintext):
        observed = counter.count(CaesarEngine().encrypt(long_plaintext, 9))

        sequential = ShiftScorer().score_all(observed, ENGLISH_REFERENCE)
        parallel = ShiftScorer(max_workers=4).score_all(observed, ENGLISH_REFERENCE)

        assert parallel == sequential

    def test_correlation(self, counter):
        reference = _reference(a=0.5, b=0.5)
        observed = counter.count("ab")
        scorer = ShiftScorer(method=ScoringMethod.CORRELATION)

        assert scorer.score(observed, reference, 0) == pytest.approx(0.5)
        assert scorer.score(observed, reference, 1) == pytest.approx(0.25)
        assert scorer.score(observed, reference, 5) == 0.0

    def test_empty_observation(self, counter):
        with pytest.raises(NoSignalError):
            ShiftScorer().score_all(counter.count("..."), ENGLISH_REFERENCE)


class TestKeySelector:
    """Test suite for key selection."""

    @pytest.fixture
    def counter(self):
        return FrequencyCounter()

    @pytest.fixture
    def tied(self, counter):
        """Observation for which shifts 3 and 9 score identically."""
        reference = _reference(a=0.5, g=0.5)
        observed = counter.count("DJJP")
        return observed, reference

    def test_recovers_shift(self, counter, long_plaintext):
        observed = counter.count(CaesarEngine().encrypt(long_plaintext, 15))

        selection = KeySelector().select(observed, ENGLISH_REFERENCE)

        assert selection.key == 15
        assert selection.ambiguous is False
        assert len(selection.scores) == 26
        assert selection.score == min(s.score for s in selection.scores)

    def test_recovers_shift_with_correlation(self, counter, long_plaintext):
        observed = counter.count(CaesarEngine().encrypt(long_plaintext, 21))
        selector = KeySelector(ShiftScorer(method=ScoringMethod.CORRELATION))

        selection = selector.select(observed, ENGLISH_REFERENCE)

        assert selection.key == 21
        assert selection.score == max(s.score for s in selection.scores)

    def test_tie_breaks_to_smallest_shift(self, tied):
        observed, reference = tied
        scorer = ShiftScorer()
        assert scorer.score(observed, reference, 3) == scorer.score(observed, reference, 9)

        selection = KeySelector(scorer).select(observed, reference)

        assert selection.key == 3
        assert selection.near_ties == [9]
        assert selection.ambiguous is True

    def test_tie_breaks_to_smallest_shift_with_correlation(self, tied):
        observed, reference = tied
        selector = KeySelector(ShiftScorer(method=ScoringMethod.CORRELATION))

        for _ in range(5):
            assert selector.select(observed, reference).key == 3

    def test_tie_break_independent_of_workers(self, tied):
        observed, reference = tied
        selector = KeySelector(ShiftScorer(max_workers=8))

        assert selector.select(observed, reference).key == 3

    def test_tie_break_with_second_reference(self, counter):
        # Mass on C and I: shift 3 places it on F/L, shift 9 on L/R
        reference = _reference(c=0.5, i=0.5)
        observed = counter.count("FLLR")

        selection = KeySelector().select(observed, reference)

        assert selection.key == 3
        assert selection.near_ties == [9]

    @pytest.fixture
    def rounding_tie(self, counter):
        """Shifts 3 and 9 tie exactly but their float sums differ in the last bit."""
        a, b = 13 / 117, 94 / 117
        reference = _reference(a=a, b=b, c=1 - a - b)
        ciphertext = "D" * 5 + "E" * 7 + "F" * 8 + "J" * 5 + "K" * 7 + "L" * 8
        return ciphertext, counter.count(ciphertext), reference

    def test_rounding_tie_breaks_to_smallest_shift(self, rounding_tie):
        _, observed, reference = rounding_tie

        selection = KeySelector().select(observed, reference)

        assert selection.key == 3
        assert selection.near_ties == [9]
        assert selection.score == selection.scores[3].score

    def test_rounding_tie_candidates_start_with_selected_key(self, rounding_tie):
        ciphertext, _, reference = rounding_tie
        engine = CaesarEngine()

        candidates = engine.candidates(ciphertext, reference, limit=3)

        assert [c.key for c in candidates[:2]] == [3, 9]
        assert candidates[0].key == engine.find_key(ciphertext, reference).key

    def test_near_tie_logged(self, tied, caplog):
        observed, reference = tied

        with caplog.at_level(logging.WARNING, logger="app.services.optimization.selection"):
            KeySelector().select(observed, reference)

        assert "Ambiguous key" in caplog.text

    def test_no_letters(self, counter):
        with pytest.raises(NoSignalError):
            KeySelector().select(counter.count(""), ENGLISH_REFERENCE)
