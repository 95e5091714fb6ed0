from app.models.schemas import PlaintextCandidate, ScoringMethod, StatisticsProfile
from app.services.pipeline.orchestrator import BreakResult


class ExplanationGenerator:
    """
    Generates human-readable explanations for cryptanalysis results.

    All explanations are grounded in actual statistics and metrics.
    """

    # Reference values for comparisons
    ENGLISH_IOC = 0.0667
    RANDOM_IOC = 0.0385
    ENGLISH_ENTROPY = 4.1

    def generate(
        self,
        statistics: StatisticsProfile,
        result: BreakResult,
        reference_name: str = "english",
    ) -> list[str]:
        """
        Generate explanations for a broken ciphertext.

        Args:
            statistics: Statistical profile of ciphertext
            result: Key selection and decryption result
            reference_name: Name of the reference distribution used

        Returns:
            List of explanation strings
        """
        explanations = []

        # 1. Explain the statistical analysis
        explanations.extend(self._explain_statistics(statistics))

        # 2. Explain the key selection
        explanations.extend(self._explain_selection(result, reference_name))

        # 3. Explain decryption results
        explanations.extend(self._explain_candidates(result.candidates, result.method))

        return explanations

    def _explain_statistics(self, statistics: StatisticsProfile) -> list[str]:
        """Explain the statistical analysis results."""
        explanations = []

        explanations.append(
            f"The ciphertext contains {statistics.length} letters "
            f"using {statistics.unique_chars} unique letters."
        )

        ioc = statistics.index_of_coincidence
        explanations.append(
            f"Index of Coincidence: {ioc:.4f}. {self._interpret_ioc(ioc)}"
        )

        entropy = statistics.entropy
        explanations.append(
            f"Entropy: {entropy:.2f} bits. {self._interpret_entropy(entropy)}"
        )

        if statistics.character_frequencies:
            top_chars = statistics.character_frequencies[:5]
            freq_str = ", ".join(
                f"{f.character} ({f.frequency*100:.1f}%)"
                for f in top_chars
            )
            explanations.append(f"Most frequent letters: {freq_str}.")

        return explanations

    def _interpret_ioc(self, ioc: float) -> str:
        """Interpret the Index of Coincidence value."""
        if ioc >= 0.060:
            return (
                f"This is close to English ({self.ENGLISH_IOC:.4f}), "
                "consistent with a single shift of natural language."
            )
        elif ioc >= 0.045:
            return (
                "This is between English and random; the text may be short "
                "or not a single-shift cipher."
            )
        else:
            return (
                f"This is near random ({self.RANDOM_IOC:.4f}); frequency "
                "analysis is unlikely to be reliable."
            )

    def _interpret_entropy(self, entropy: float) -> str:
        """Interpret the entropy value."""
        max_entropy = 4.7  # log2(26)

        if entropy < 3.5:
            return "Low entropy indicates highly structured text."
        elif abs(entropy - self.ENGLISH_ENTROPY) <= 0.3:
            return (
                f"Close to English ({self.ENGLISH_ENTROPY:.1f} bits), "
                "consistent with natural language."
            )
        elif entropy < 4.4:
            return "Moderate entropy, somewhat further from English than usual."
        else:
            return f"Near-maximum entropy ({max_entropy:.1f}) suggests high randomness."

    def _interpret_chi_squared(self, chi_sq: float) -> str:
        """Interpret chi-squared over letter proportions."""
        if chi_sq < 0.1:
            return "Excellent match to the reference letter frequencies."
        elif chi_sq < 0.3:
            return "Good match, likely real text."
        elif chi_sq < 0.6:
            return "Moderate deviation from the reference."
        else:
            return "Large deviation from the reference letter distribution."

    def _explain_selection(
        self,
        result: BreakResult,
        reference_name: str,
    ) -> list[str]:
        """Explain how the key was chosen."""
        explanations = [
            f"All 26 shifts were scored against the {reference_name} reference "
            f"using {result.method.value.replace('_', '-')}; shift {result.key} "
            "aligned best."
        ]

        if result.method is ScoringMethod.CHI_SQUARED:
            explanations.append(
                f"Chi-squared at shift {result.key}: {result.score:.4f}. "
                f"{self._interpret_chi_squared(result.score)}"
            )
        else:
            explanations.append(
                f"Correlation at shift {result.key}: {result.score:.4f} "
                "(higher is better)."
            )

        if result.ambiguous:
            others = ", ".join(str(shift) for shift in result.near_ties)
            explanations.append(
                f"Shifts {others} scored the same as shift {result.key}; "
                "the smallest shift was chosen. Treat the key as uncertain."
            )

        return explanations

    def _explain_candidates(
        self,
        candidates: list[PlaintextCandidate],
        method: ScoringMethod,
    ) -> list[str]:
        """Explain decryption candidates."""
        explanations = []

        if not candidates:
            explanations.append("No viable plaintext candidates found.")
            return explanations

        best = candidates[0]
        explanations.append(
            f"Best decryption result ({best.confidence*100:.0f}% confidence), "
            f"key {best.key}:"
        )

        preview = best.plaintext[:100]
        if len(best.plaintext) > 100:
            preview += "..."
        explanations.append(f'  Plaintext preview: "{preview}"')

        direction = "lower" if method.lower_is_better else "higher"
        explanations.append(
            f"  Score: {best.score:.4f} ({direction} is better match)"
        )

        if len(candidates) > 1:
            runners_up = ", ".join(str(c.key) for c in candidates[1:4])
            explanations.append(f"  Next best shifts: {runners_up}.")

        return explanations
