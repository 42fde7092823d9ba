"""Base advisory provider interface."""

from abc import ABC, abstractmethod


class BaseAdvisoryProvider(ABC):
    """Abstract base class for advisory text providers."""

    name: str = "base"

    @abstractmethod
    def advise(self, query: str) -> str:
        """Return a free-text explanation for a food query.

        Args:
            query: Non-blank, trimmed food query

        Returns:
            Advisory text

        Raises:
            AdvisoryError: If the provider cannot produce a response
        """
        pass
