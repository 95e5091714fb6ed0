"""
Caesar cryptanalysis pipeline.

ciphertext -> letter counts -> per-shift scores -> key -> plaintext.

The module-level functions are the public entry points; they run with
default scoring parameters. ``DecryptionOrchestrator`` carries tuned
parameters (for example from application settings).
"""

from dataclasses import dataclass

from app.core.config import Settings
from app.models.schemas import PlaintextCandidate, ScoringMethod, ShiftScore
from app.services.analysis.reference import ENGLISH_REFERENCE, ReferenceDistribution
from app.services.analysis.statistics import FrequencyCounter, FrequencyTable
from app.services.engines.monoalphabetic.caesar import CaesarEngine
from app.services.optimization.scoring import ShiftScorer
from app.services.optimization.selection import KeySelector


@dataclass
class BreakResult:
    """Result of breaking a Caesar ciphertext."""

    key: int
    plaintext: str
    score: float
    method: ScoringMethod
    scores: list[ShiftScore]
    near_ties: list[int]
    observed: FrequencyTable
    candidates: list[PlaintextCandidate]

    @property
    def ambiguous(self) -> bool:
        return bool(self.near_ties)


class DecryptionOrchestrator:
    """Runs frequency analysis, key selection and decryption."""

    def __init__(
        self,
        method: ScoringMethod = ScoringMethod.CHI_SQUARED,
        floor: float = ShiftScorer.DEFAULT_FLOOR,
        ambiguity_tolerance: float = 1e-9,
        max_workers: int = 1,
        candidate_limit: int = 5,
    ):
        self.scorer = ShiftScorer(method=method, floor=floor, max_workers=max_workers)
        self.selector = KeySelector(self.scorer, ambiguity_tolerance=ambiguity_tolerance)
        self.engine = CaesarEngine(selector=self.selector)
        self.counter = self.engine.counter
        self.candidate_limit = candidate_limit

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        method: ScoringMethod = ScoringMethod.CHI_SQUARED,
        candidate_limit: int | None = None,
    ) -> "DecryptionOrchestrator":
        return cls(
            method=method,
            floor=settings.chi_squared_floor,
            ambiguity_tolerance=settings.ambiguity_tolerance,
            max_workers=settings.max_parallel_scorers,
            candidate_limit=candidate_limit or settings.candidate_limit,
        )

    def analyze(self, text: str) -> FrequencyTable:
        return self.counter.count(text)

    def orchestrate(
        self,
        ciphertext: str,
        reference: ReferenceDistribution = ENGLISH_REFERENCE,
    ) -> BreakResult:
        """
        Recover the key of ``ciphertext`` and decrypt it.

        Raises:
            NoSignalError: if the ciphertext contains no letters
        """
        observed = self.counter.count(ciphertext)
        selection = self.selector.select(observed, reference)
        candidates = self.engine.candidates(
            ciphertext,
            reference,
            limit=self.candidate_limit,
            selection=selection,
        )

        return BreakResult(
            key=selection.key,
            plaintext=self.engine.decrypt(ciphertext, selection.key),
            score=selection.score,
            method=self.scorer.method,
            scores=selection.scores,
            near_ties=selection.near_ties,
            observed=observed,
            candidates=candidates,
        )


_default = DecryptionOrchestrator()


def analyze_frequency(text: str) -> FrequencyTable:
    """Letter counts of ``text``; proportions are available on the table."""
    return _default.analyze(text)


def break_caesar_cipher(
    ciphertext: str,
    reference: ReferenceDistribution = ENGLISH_REFERENCE,
) -> BreakResult:
    """Find the shift that best aligns ``ciphertext`` with ``reference``."""
    return _default.orchestrate(ciphertext, reference)


def shift_encrypt(text: str, key: int) -> str:
    return _default.engine.encrypt(text, key)


def shift_decrypt(text: str, key: int) -> str:
    return _default.engine.decrypt(text, key)
