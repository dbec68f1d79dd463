"""Custom exceptions for transport and logging configuration."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Exception raised when configuration values are malformed.

    Collects every problem found in a single pass so operators can fix the
    environment in one go, along with hints for the usual fixes.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: Individual problems, one per offending key
            suggestions: Hints for resolving the problems
        """
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nConfiguration Errors:")
            parts.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)
