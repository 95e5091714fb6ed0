import math
from collections.abc import Iterable
from dataclasses import dataclass

from app.core.exceptions import NoSignalError
from app.models.schemas import FrequencyData, StatisticsProfile
from app.services.preprocessing.alphabet import ENGLISH_ALPHABET, Alphabet


@dataclass(frozen=True)
class FrequencyTable:
    """
    Observed letter counts of a text.

    Every letter of the alphabet has an entry (zeros included), so tables
    can be compared position by position. ``total`` is the number of letter
    characters scanned and always equals ``sum(counts)``; ``scanned`` counts
    every character, letter or not.
    """

    counts: tuple[int, ...]
    total: int
    alphabet: Alphabet = ENGLISH_ALPHABET
    scanned: int = 0

    def get(self, letter: str) -> int | None:
        """Count for ``letter``, or None when it is not a letter."""
        ordinal = self.alphabet.lookup(letter)
        if ordinal is None:
            return None
        return self.counts[ordinal]

    def count(self, letter: str) -> int:
        return self.counts[self.alphabet.letter_to_ordinal(letter)]

    def proportion(self, letter: str) -> float:
        """
        Share of ``letter`` among all letters scanned.

        Raises:
            NoSignalError: if the text contained no letters
        """
        if self.total == 0:
            raise NoSignalError(self.scanned)
        return self.count(letter) / self.total

    def proportions(self) -> tuple[float, ...]:
        """Normalized counts, ordered by ordinal."""
        if self.total == 0:
            raise NoSignalError(self.scanned)
        return tuple(count / self.total for count in self.counts)

    def as_dict(self, uppercase: bool = False) -> dict[str, int]:
        return {
            self.alphabet.ordinal_to_letter(i, uppercase): count
            for i, count in enumerate(self.counts)
        }

    def proportions_dict(self, uppercase: bool = False) -> dict[str, float]:
        return {
            self.alphabet.ordinal_to_letter(i, uppercase): value
            for i, value in enumerate(self.proportions())
        }

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        """Letters ordered by count descending, alphabetical within ties."""
        ranked = sorted(
            ((self.alphabet.letters[i], count) for i, count in enumerate(self.counts)),
            key=lambda item: (-item[1], item[0]),
        )
        return ranked if n is None else ranked[:n]


class FrequencyCounter:
    """
    Letter frequency analysis for cryptanalysis.

    Produces the observed distribution that the shift scorer compares
    against a reference, plus summary statistics:
    - Character frequencies
    - Index of Coincidence (IOC)
    - Entropy
    """

    def __init__(self, alphabet: Alphabet = ENGLISH_ALPHABET):
        self.alphabet = alphabet

    def count(self, text: Iterable[str]) -> FrequencyTable:
        """
        Count letters in ``text``, ignoring case and non-letters.

        Args:
            text: Arbitrary text

        Returns:
            FrequencyTable with an entry for every letter
        """
        counts = [0] * len(self.alphabet)
        scanned = 0
        for char in text:
            scanned += 1
            ordinal = self.alphabet.lookup(char)
            if ordinal is not None:
                counts[ordinal] += 1

        return FrequencyTable(
            counts=tuple(counts),
            total=sum(counts),
            alphabet=self.alphabet,
            scanned=scanned,
        )

    def profile(self, text: str) -> StatisticsProfile:
        """
        Perform statistical analysis on text.

        Text without letters yields an all-zero profile rather than an error.
        """
        table = self.count(text)

        return StatisticsProfile(
            length=table.total,
            unique_chars=sum(1 for count in table.counts if count),
            character_frequencies=self._character_frequencies(table),
            index_of_coincidence=self.index_of_coincidence(table),
            entropy=self.entropy(table),
        )

    def _character_frequencies(self, table: FrequencyTable) -> list[FrequencyData]:
        """Calculate character frequencies, most frequent first."""
        total = table.total
        return [
            FrequencyData(
                character=letter,
                count=count,
                frequency=count / total if total > 0 else 0.0,
            )
            for letter, count in table.most_common()
        ]

    def index_of_coincidence(self, table: FrequencyTable) -> float:
        """
        Calculate Index of Coincidence.

        IOC measures how likely two randomly chosen letters are the same.
        - English text: ~0.0667
        - Random text: ~0.0385 (1/26)
        """
        n = table.total
        if n <= 1:
            return 0.0

        numerator = sum(f * (f - 1) for f in table.counts)
        return numerator / (n * (n - 1))

    def entropy(self, table: FrequencyTable) -> float:
        """
        Calculate Shannon entropy in bits per letter.

        Lower entropy suggests more structure (like natural language).
        """
        n = table.total
        if n == 0:
            return 0.0

        entropy = 0.0
        for count in table.counts:
            if count:
                p = count / n
                entropy -= p * math.log2(p)

        return entropy
