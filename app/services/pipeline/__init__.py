"""
Caesar cryptanalysis pipeline.

1. Count letter frequencies in the ciphertext
2. Score the observation against the reference under all 26 shifts
3. Select the best shift (smallest shift on ties)
4. Decrypt with the selected shift
"""

from app.services.pipeline.orchestrator import (
    BreakResult,
    DecryptionOrchestrator,
    analyze_frequency,
    break_caesar_cipher,
    shift_decrypt,
    shift_encrypt,
)

__all__ = [
    "BreakResult",
    "DecryptionOrchestrator",
    "analyze_frequency",
    "break_caesar_cipher",
    "shift_decrypt",
    "shift_encrypt",
]
