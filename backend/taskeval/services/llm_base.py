"""
Task Evaluator Backend — Abstract Text Generator Interface
===========================================================

What:  Abstract base class for generative-text providers.
How:   Concrete implementations inherit from TextGenerator and implement
       generate() and health_check().
Who:   Injected into AnalysisService and SummaryService; tests substitute
       an in-memory implementation through FastAPI dependency overrides.
"""

from abc import ABC, abstractmethod


class TextGenerator(ABC):
    """
    Abstract interface for a single-turn prompt → text completion.

    Contract:
        - generate() performs exactly one upstream call (no retries)
        - Provider-specific errors are wrapped in LLMServiceError
        - A missing response object is an LLMServiceError, never ""

    Implementations:
        - GeminiService: Google Gemini (default)
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send `prompt` to the model and return the reply text verbatim.

        Raises:
            LLMServiceError: When the upstream call fails or returns no response.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable and the credentials are accepted.

        Returns: True if service is reachable, False otherwise. Never raises.
        """
        ...
