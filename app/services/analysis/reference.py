import math
from collections.abc import Mapping
from types import MappingProxyType

from app.core.exceptions import InvalidReferenceError
from app.services.preprocessing.alphabet import ENGLISH_ALPHABET, Alphabet


class ReferenceDistribution:
    """
    Expected relative letter frequencies of a source language.

    Read-only once built. Values are proportions in [0, 1] that sum to 1
    within ``tolerance``; every letter of the alphabet must be present.
    """

    def __init__(
        self,
        frequencies: Mapping[str, float],
        alphabet: Alphabet = ENGLISH_ALPHABET,
        tolerance: float = 1e-6,
        name: str = "custom",
    ):
        self.alphabet = alphabet
        self.name = name

        values = [0.0] * len(alphabet)
        seen = set()
        for letter, value in frequencies.items():
            ordinal = alphabet.lookup(letter) if isinstance(letter, str) else None
            if ordinal is None:
                raise InvalidReferenceError(
                    f"Reference key {letter!r} is not a letter",
                    {"letter": repr(letter)},
                )
            if ordinal in seen:
                raise InvalidReferenceError(
                    f"Letter {letter!r} appears more than once",
                    {"letter": letter},
                )
            if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise InvalidReferenceError(
                    f"Frequency for {letter!r} must be a proportion in [0, 1]",
                    {"letter": letter, "value": repr(value)},
                )
            seen.add(ordinal)
            values[ordinal] = float(value)

        missing = [alphabet.letters[i] for i in range(len(alphabet)) if i not in seen]
        if missing:
            raise InvalidReferenceError(
                f"Reference is missing letters: {''.join(missing)}",
                {"missing": missing},
            )

        total = math.fsum(values)
        if abs(total - 1.0) > tolerance:
            raise InvalidReferenceError(
                f"Reference proportions sum to {total:.6f}, expected 1",
                {"total": total, "tolerance": tolerance},
            )

        self._values = tuple(values)

    @classmethod
    def from_percentages(
        cls,
        percentages: Mapping[str, float],
        alphabet: Alphabet = ENGLISH_ALPHABET,
        name: str = "custom",
    ) -> "ReferenceDistribution":
        """Build a distribution from published percentage tables, re-normalized to 1."""
        total = math.fsum(percentages.values())
        if total <= 0:
            raise InvalidReferenceError("Percentages must have a positive total")
        return cls(
            {letter: value / total for letter, value in percentages.items()},
            alphabet=alphabet,
            name=name,
        )

    def __getitem__(self, ordinal: int) -> float:
        return self._values[ordinal]

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ReferenceDistribution(name={self.name!r})"

    @property
    def values(self) -> tuple[float, ...]:
        return self._values

    def frequency(self, letter: str) -> float:
        return self._values[self.alphabet.letter_to_ordinal(letter)]

    def rotated(self, shift: int) -> tuple[float, ...]:
        """Expected proportion at each ciphertext ordinal under ``shift``."""
        size = len(self._values)
        return tuple(self._values[(i - shift) % size] for i in range(size))

    def as_dict(self) -> Mapping[str, float]:
        return MappingProxyType(
            {letter: value for letter, value in zip(self.alphabet.letters, self._values)}
        )


# English letter frequencies (percentage)
ENGLISH_FREQ: Mapping[str, float] = MappingProxyType({
    "E": 12.70, "T": 9.06, "A": 8.17, "O": 7.51, "I": 6.97,
    "N": 6.75, "S": 6.33, "H": 6.09, "R": 5.99, "D": 4.25,
    "L": 4.03, "C": 2.78, "U": 2.76, "M": 2.41, "W": 2.36,
    "F": 2.23, "G": 2.02, "Y": 1.97, "P": 1.93, "B": 1.29,
    "V": 0.98, "K": 0.77, "J": 0.15, "X": 0.15, "Q": 0.10,
    "Z": 0.07,
})

ENGLISH_REFERENCE = ReferenceDistribution.from_percentages(ENGLISH_FREQ, name="english")
