"""Errors raised by the scan and analysis pipeline.

Only ``NoIngredientsExtracted`` and ``TextExtractionFailed`` reach the caller as a
failed operation. Per-ingredient problems are absorbed by the analyzer and show up
as degraded caution entries instead.
"""


class LabelScanError(Exception):
    """Base class for labelscan errors."""

    code = "labelscan_error"


class TextExtractionFailed(LabelScanError):
    code = "text_extraction_failed"


class NoIngredientsExtracted(LabelScanError):
    code = "no_ingredients_extracted"

    def __init__(self, message: str = "No ingredients could be extracted from the label.") -> None:
        super().__init__(message)


class ResearchProviderFailure(LabelScanError):
    code = "research_provider_failure"

    def __init__(self, ingredient_text: str, reason: str) -> None:
        super().__init__(f"research failed for {ingredient_text!r}: {reason}")
        self.ingredient_text = ingredient_text
        self.reason = reason


class AnalysisCancelled(LabelScanError):
    code = "analysis_cancelled"
