from abc import ABC, abstractmethod
from typing import Optional, Dict, Any


class ProviderError(Exception):
    """
    Raised when an upstream provider call fails.

    status_code is the upstream HTTP status when one is known,
    None for transport failures and unreadable responses.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BaseModelAdapter(ABC):
    """
    Abstract base class for all LLM providers.
    Enforces a common interface for generation.
    """

    @abstractmethod
    async def generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        """
        Generates text from the provider.
        
        Args:
            prompt: User input, sent as a single user message
            model: Optional model override
            **kwargs: Extra request params
            
        Returns:
            Dict containing:
                - content: Optional[str]
                - reasoning: Optional[str]
                - model: str
                - provider: str
                - tokens_used: int

        Raises:
            ProviderError: the call failed or the response was unusable
        """
        pass
