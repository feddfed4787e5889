"""Text generation through the OpenAI Responses API."""

from typing import Any, Optional

import openai

from .errors import EmptyModelResponse, ModelInvocationError
from .logging_config import get_logger

logger = get_logger("model")

DEFAULT_MODEL = "gpt-5-nano"
DEFAULT_REASONING_EFFORT = "low"
DEFAULT_TIMEOUT = 60.0
DEFAULT_INSTRUCTIONS = "Responses must be conversational but professional"


def create_openai_client(api_key: Optional[str], timeout: float) -> openai.OpenAI:
    """Create an OpenAI client that never retries on its own.

    Args:
        api_key: OpenAI API key
        timeout: Request timeout in seconds

    Returns:
        Configured client

    Raises:
        ValueError: If no API key is given
    """
    if not api_key:
        raise ValueError("OPENAI_API_KEY not found in environment variables")
    return openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)


class ModelInvoker:
    """Send a prompt to the model and return the generated text."""

    def __init__(
        self,
        client: Any,
        model: str = DEFAULT_MODEL,
        reasoning_effort: str = DEFAULT_REASONING_EFFORT,
        instructions: str = DEFAULT_INSTRUCTIONS,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.client = client
        self.model = model
        self.reasoning_effort = reasoning_effort
        self.instructions = instructions
        self.timeout = timeout

    def invoke(self, prompt: str) -> str:
        """Make a single generation attempt.

        Args:
            prompt: Assembled prompt

        Returns:
            Generated text, exactly as returned by the service

        Raises:
            ModelInvocationError: If the request fails or times out
            EmptyModelResponse: If the service returns no usable text
        """
        logger.info("Querying %s (reasoning effort: %s)", self.model, self.reasoning_effort)

        try:
            response = self.client.responses.create(
                model=self.model,
                reasoning={"effort": self.reasoning_effort},
                instructions=self.instructions,
                input=prompt,
                timeout=self.timeout,
            )
        except openai.APITimeoutError as e:
            raise ModelInvocationError(f"OpenAI query timed out after {self.timeout}s") from e
        except Exception as e:
            raise ModelInvocationError(f"OpenAI query failed: {e}") from e

        text = getattr(response, "output_text", None)
        if not isinstance(text, str) or not text.strip():
            raise EmptyModelResponse("OpenAI did not return a cover letter")

        return text
