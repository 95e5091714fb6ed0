from concurrent.futures import ThreadPoolExecutor

from app.core.exceptions import NoSignalError
from app.models.schemas import ScoringMethod, ShiftScore
from app.services.analysis.reference import ReferenceDistribution
from app.services.analysis.statistics import FrequencyTable


class ShiftScorer:
    """
    Scores how well an observed distribution matches a shifted reference.

    For shift ``s`` the reference letter with ordinal ``i - s`` is expected
    to appear as ciphertext letter ``i``. Two statistics are supported:
    - Chi-squared over proportions (lower = better match)
    - Correlation, the dot product of both vectors (higher = better match)
    """

    DEFAULT_FLOOR = 1e-6

    def __init__(
        self,
        method: ScoringMethod = ScoringMethod.CHI_SQUARED,
        floor: float = DEFAULT_FLOOR,
        max_workers: int = 1,
    ):
        self.method = method
        self.floor = floor
        self.max_workers = max(1, max_workers)

    def score(
        self,
        observed: FrequencyTable,
        reference: ReferenceDistribution,
        shift: int,
    ) -> float:
        """
        Score a single candidate shift.

        Args:
            observed: Letter counts of the ciphertext
            reference: Expected language distribution
            shift: Candidate key

        Returns:
            Statistic value; compare using ``method.lower_is_better``
        """
        return self._score_proportions(observed.proportions(), reference, shift)

    def score_all(
        self,
        observed: FrequencyTable,
        reference: ReferenceDistribution,
    ) -> list[ShiftScore]:
        """
        Score every shift in the alphabet, ordered by shift.

        All shifts are always evaluated. With ``max_workers > 1`` they run
        on a thread pool; the returned order does not depend on completion.
        """
        if observed.total == 0:
            raise NoSignalError(observed.scanned)

        proportions = observed.proportions()
        shifts = list(range(len(reference)))

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                values = list(pool.map(
                    lambda shift: self._score_proportions(proportions, reference, shift),
                    shifts,
                ))
        else:
            values = [
                self._score_proportions(proportions, reference, shift)
                for shift in shifts
            ]

        return [ShiftScore(shift=shift, score=value) for shift, value in zip(shifts, values)]

    def _score_proportions(
        self,
        proportions: tuple[float, ...],
        reference: ReferenceDistribution,
        shift: int,
    ) -> float:
        expected = reference.rotated(shift)

        if self.method is ScoringMethod.CORRELATION:
            return sum(o * e for o, e in zip(proportions, expected))

        return sum(
            (o - e) ** 2 / (e + self.floor)
            for o, e in zip(proportions, expected)
        )
