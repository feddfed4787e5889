"""Request pipeline: validate, extract, compose, invoke, persist."""

from typing import MutableMapping, Optional

from .cache import ResponseCache
from .config import PipelineConfig
from .errors import CacheCorruptError, CacheWriteError, MissingInput, PipelineError
from .logging_config import get_logger
from .model import ModelInvoker, create_openai_client
from .prompts import DEFAULT_TASK, build_prompt, render_task
from .resume import ResumeExtractor

logger = get_logger("pipeline")

INPUT_KEY = "naturalLanguageQuery"
OUTPUT_KEY = "coverLetter"


class PipelineController:
    """Turn a job description into a cover letter and record it.

    Stages run strictly in order and the first failure ends the request.
    Nothing is written to the cache unless the model produced a letter.
    """

    def __init__(
        self,
        extractor: ResumeExtractor,
        invoker: ModelInvoker,
        cache: ResponseCache,
        prompt_task: str = DEFAULT_TASK,
        strict_cache: bool = False,
    ):
        """Initialize the pipeline.

        Args:
            extractor: Resume text source
            invoker: Model client wrapper
            cache: Letter store
            prompt_task: Task instructions passed to ``build_prompt``
            strict_cache: Fail the request when the letter cannot be cached,
                instead of returning it with a logged warning
        """
        self.extractor = extractor
        self.invoker = invoker
        self.cache = cache
        self.prompt_task = prompt_task
        self.strict_cache = strict_cache

    def run(self, job_description: Optional[str]) -> str:
        """Generate a cover letter for a job description.

        Args:
            job_description: Job posting text; also the cache key

        Returns:
            The generated cover letter

        Raises:
            MissingInput: If the job description is missing or empty
            ResumeReadError, ResumeParseError: If the resume cannot be read
            ModelInvocationError, EmptyModelResponse: If generation fails
            CacheWriteError, CacheCorruptError: Only when ``strict_cache`` is set
        """
        if not isinstance(job_description, str) or not job_description:
            raise MissingInput("Cover letter pipeline did not receive a job description")

        resume_text = self.extractor.extract()

        prompt = build_prompt(job_description, resume_text, task=self.prompt_task)

        letter = self.invoker.invoke(prompt)

        try:
            self.cache.append(job_description, letter)
        except (CacheWriteError, CacheCorruptError) as e:
            if self.strict_cache:
                raise
            logger.warning("Returning cover letter without caching it: %s", e.log)

        return letter

    def process(self, state: MutableMapping) -> Optional[PipelineError]:
        """Run as one stage of a request chain.

        Reads the job description from ``state["naturalLanguageQuery"]`` and
        stores the letter in ``state["coverLetter"]``.

        Returns:
            None on success, otherwise the error for the downstream handler
            (``coverLetter`` is left unset)
        """
        try:
            state[OUTPUT_KEY] = self.run(state.get(INPUT_KEY))
        except PipelineError as e:
            logger.error("%s (status %d)", e.log, e.status)
            return e
        return None


def build_pipeline(config: Optional[PipelineConfig] = None) -> PipelineController:
    """Wire a pipeline from configuration.

    Args:
        config: Settings to use (defaults to ``PipelineConfig.from_env()``)

    Raises:
        ValueError: If no OpenAI API key is configured
    """
    if config is None:
        config = PipelineConfig.from_env()

    client = create_openai_client(config.api_key, config.timeout)
    return PipelineController(
        extractor=ResumeExtractor(config.resume_path),
        invoker=ModelInvoker(
            client,
            model=config.model,
            reasoning_effort=config.reasoning_effort,
            timeout=config.timeout,
        ),
        cache=ResponseCache(config.cache_path, strict=config.strict_cache),
        prompt_task=render_task(config.signature),
        strict_cache=config.strict_cache,
    )
