import logging
from dataclasses import dataclass

from app.models.schemas import ScoringMethod, ShiftScore
from app.services.analysis.reference import ReferenceDistribution
from app.services.analysis.statistics import FrequencyTable
from app.services.optimization.scoring import ShiftScorer

logger = logging.getLogger(__name__)


@dataclass
class KeySelection:
    """Outcome of choosing a key from the per-shift scores."""

    key: int
    score: float
    scores: list[ShiftScore]
    near_ties: list[int]

    @property
    def ambiguous(self) -> bool:
        """True when another shift scored within tolerance of the winner."""
        return bool(self.near_ties)


class KeySelector:
    """
    Picks the shift whose rotated reference best matches the observation.

    Ties are broken by the smallest shift, so the result is reproducible
    whatever order the scores were computed in.
    """

    def __init__(
        self,
        scorer: ShiftScorer | None = None,
        ambiguity_tolerance: float = 1e-9,
    ):
        self.scorer = scorer or ShiftScorer()
        self.ambiguity_tolerance = ambiguity_tolerance

    @property
    def method(self) -> ScoringMethod:
        return self.scorer.method

    def select(
        self,
        observed: FrequencyTable,
        reference: ReferenceDistribution,
    ) -> KeySelection:
        """
        Choose the best key for ``observed``.

        Raises:
            NoSignalError: if the observed table holds no letters
        """
        scores = self.scorer.score_all(observed, reference)
        best = min(scores, key=self._rank)

        # Scores within tolerance are ties; the smallest of them wins
        tied = self._within_tolerance(scores, best)
        best = scores[min(s.shift for s in tied)]
        near_ties = [s.shift for s in self._within_tolerance(scores, best) if s is not best]

        logger.debug(
            "Selected shift %d (%s=%.6f) from %d letters",
            best.shift, self.method.value, best.score, observed.total,
        )
        if near_ties:
            logger.warning(
                "Ambiguous key: shifts %s score within %g of shift %d",
                near_ties, self.ambiguity_tolerance, best.shift,
            )

        return KeySelection(
            key=best.shift,
            score=best.score,
            scores=scores,
            near_ties=near_ties,
        )

    def _rank(self, shift_score: ShiftScore) -> tuple[float, int]:
        value = shift_score.score if self.method.lower_is_better else -shift_score.score
        return (value, shift_score.shift)

    def _within_tolerance(
        self,
        scores: list[ShiftScore],
        best: ShiftScore,
    ) -> list[ShiftScore]:
        return [
            s for s in scores
            if abs(s.score - best.score) <= self.ambiguity_tolerance
        ]
