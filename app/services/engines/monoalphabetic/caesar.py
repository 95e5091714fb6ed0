import random
from typing import Any

from app.core.exceptions import InvalidKeyError
from app.models.schemas import PlaintextCandidate, ScoringMethod
from app.services.analysis.reference import ENGLISH_REFERENCE, ReferenceDistribution
from app.services.analysis.statistics import FrequencyCounter
from app.services.optimization.selection import KeySelection, KeySelector
from app.services.preprocessing.alphabet import ENGLISH_ALPHABET, Alphabet


class CaesarEngine:
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. With only 26 possible keys, it is broken by scoring
    the letter distribution under every shift against a reference language.

    Letter case is kept and characters outside the alphabet pass through.
    """

    name = "Caesar Cipher"
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    def __init__(
        self,
        alphabet: Alphabet = ENGLISH_ALPHABET,
        selector: KeySelector | None = None,
    ):
        self.alphabet = alphabet
        self.counter = FrequencyCounter(alphabet)
        self.selector = selector or KeySelector()

    def encrypt(self, plaintext: str, key: int | str) -> str:
        """Encrypt plaintext with the given shift."""
        return self._shift(plaintext, self._parse_key(key))

    def decrypt(self, ciphertext: str, key: int | str) -> str:
        """Decrypt by shifting in reverse."""
        return self._shift(ciphertext, -self._parse_key(key))

    def find_key(
        self,
        ciphertext: str,
        reference: ReferenceDistribution = ENGLISH_REFERENCE,
    ) -> KeySelection:
        """
        Find the most likely shift for ``ciphertext``.

        Raises:
            NoSignalError: if the ciphertext contains no letters
        """
        observed = self.counter.count(ciphertext)
        return self.selector.select(observed, reference)

    def candidates(
        self,
        ciphertext: str,
        reference: ReferenceDistribution = ENGLISH_REFERENCE,
        limit: int = 5,
        selection: KeySelection | None = None,
    ) -> list[PlaintextCandidate]:
        """
        Decrypt under the best ``limit`` shifts, best first.

        A precomputed ``selection`` for the same ciphertext may be passed
        to avoid scoring twice. Shifts tied with the selected key come
        first, smallest shift first, so the top candidate is the selected key.
        """
        if selection is None:
            selection = self.find_key(ciphertext, reference)

        method = self.selector.method
        tied = {selection.key, *selection.near_ties}
        ranked = sorted(
            selection.scores,
            key=lambda s: (
                (0, 0.0, s.shift)
                if s.shift in tied
                else (1, s.score if method.lower_is_better else -s.score, s.shift)
            ),
        )
        top_score = max((s.score for s in selection.scores), default=0.0)

        return [
            PlaintextCandidate(
                plaintext=self._shift(ciphertext, -s.shift),
                key=s.shift,
                score=s.score,
                confidence=self._confidence(s.score, method, top_score),
            )
            for s in ranked[:limit]
        ]

    def generate_random_key(self) -> int:
        """Generate a random shift (1-25, excluding 0 and 26)."""
        return random.randint(1, len(self.alphabet) - 1)

    def validate_key(self, key: Any) -> bool:
        """Validate that key is a valid shift (0-25)."""
        try:
            self._parse_key(key)
        except InvalidKeyError:
            return False
        return True

    def explain(self, ciphertext: str, plaintext: str, key: int) -> str:
        """Generate human-readable explanation."""
        pair = next(
            (
                (c, p)
                for c, p in zip(ciphertext, plaintext)
                if self.alphabet.is_letter(c)
            ),
            None,
        )
        example = (
            f"For example, the ciphertext letter '{pair[0]}' becomes '{pair[1]}'."
            if pair
            else "The text contains no letters to shift."
        )

        return (
            f"Caesar cipher with shift of {key}. "
            f"Each letter was shifted back {key} positions in the alphabet. "
            f"{example}"
        )

    def _parse_key(self, key: Any) -> int:
        """Parse key to integer shift value."""
        if isinstance(key, bool):
            raise InvalidKeyError(key)
        if isinstance(key, str):
            try:
                shift = int(key.strip())
            except ValueError:
                raise InvalidKeyError(key) from None
        elif isinstance(key, int):
            shift = key
        else:
            raise InvalidKeyError(key)

        if not 0 <= shift < len(self.alphabet):
            raise InvalidKeyError(key)
        return shift

    def _shift(self, text: str, shift: int) -> str:
        size = len(self.alphabet)
        result = []

        for char in text:
            ordinal = self.alphabet.lookup(char)
            if ordinal is None:
                result.append(char)
            else:
                result.append(
                    self.alphabet.ordinal_to_letter(
                        (ordinal + shift) % size,
                        uppercase=char.isupper(),
                    )
                )

        return "".join(result)

    @staticmethod
    def _confidence(score: float, method: ScoringMethod, top_score: float) -> float:
        """Map a score to 0..1 (higher = more confident)."""
        if method.lower_is_better:
            return 1.0 / (1.0 + score)
        if top_score <= 0:
            return 0.0
        return max(0.0, min(1.0, score / top_score))
