import string
from dataclasses import dataclass, field

from app.core.exceptions import InvalidSymbolError


@dataclass(frozen=True)
class Alphabet:
    """
    Ordered catalogue of letters and the letter <-> ordinal mapping.

    Lookups are case-insensitive: both cases of a letter map to the same
    ordinal. Only the letters of ``letters`` (and their lowercase forms)
    are recognized; accented or non-Latin letters are non-letters here.
    """

    letters: str = string.ascii_uppercase
    _ordinals: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        upper = self.letters.upper()
        if len(set(upper)) != len(upper):
            raise ValueError("Alphabet letters must be distinct")

        ordinals = {}
        for index, letter in enumerate(upper):
            ordinals[letter] = index
            ordinals[letter.lower()] = index
        object.__setattr__(self, "letters", upper)
        object.__setattr__(self, "_ordinals", ordinals)

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self):
        return iter(self.letters)

    def lookup(self, char: str) -> int | None:
        """Return the ordinal of ``char`` or None if it is not a letter."""
        return self._ordinals.get(char)

    def is_letter(self, char: str) -> bool:
        return char in self._ordinals

    def letter_to_ordinal(self, letter: str) -> int:
        """
        Map a letter to its position in the alphabet.

        Raises:
            InvalidSymbolError: if ``letter`` is not one of the alphabet letters
        """
        ordinal = self.lookup(letter) if isinstance(letter, str) else None
        if ordinal is None:
            raise InvalidSymbolError(letter)
        return ordinal

    def ordinal_to_letter(self, ordinal: int, uppercase: bool = True) -> str:
        """
        Map an ordinal back to its letter.

        Args:
            ordinal: Position in the alphabet
            uppercase: Case of the returned letter

        Returns:
            The letter, upper- or lowercase per ``uppercase``
        """
        if not isinstance(ordinal, int) or not 0 <= ordinal < len(self.letters):
            raise InvalidSymbolError(ordinal)
        letter = self.letters[ordinal]
        return letter if uppercase else letter.lower()


ENGLISH_ALPHABET = Alphabet()


def letter_to_ordinal(letter: str) -> int:
    return ENGLISH_ALPHABET.letter_to_ordinal(letter)


def ordinal_to_letter(ordinal: int, uppercase: bool = True) -> str:
    return ENGLISH_ALPHABET.ordinal_to_letter(ordinal, uppercase)
