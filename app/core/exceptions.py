from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidSymbolError(ValidationError):
    """Raised when a character outside the alphabet is used as a letter."""

    def __init__(self, symbol: Any):
        super().__init__(
            f"Symbol {symbol!r} is not a letter of the alphabet",
            {"symbol": repr(symbol)},
        )


class InvalidKeyError(ValidationError):
    """Raised when a shift key is not an integer in [0, 25]."""

    def __init__(self, key: Any):
        super().__init__(
            f"Key {key!r} is not a shift between 0 and 25",
            {"key": repr(key)},
        )


class InvalidReferenceError(ValidationError):
    """Raised when a reference distribution is malformed."""

    pass


class AnalysisError(CryptanalysisError):
    """Raised when statistical analysis fails."""

    pass


class NoSignalError(AnalysisError):
    """Raised when the text holds no letters to analyze."""

    def __init__(self, length: int):
        super().__init__(
            f"Text of {length} characters contains no letters; "
            "the frequency distribution is undefined",
            {"length": length},
        )
