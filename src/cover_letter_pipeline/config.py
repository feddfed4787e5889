"""Environment-driven configuration for the cover letter pipeline."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .model import DEFAULT_MODEL, DEFAULT_REASONING_EFFORT, DEFAULT_TIMEOUT
from .prompts import Signature

# Load environment variables
load_dotenv()

RESUME_FILENAME = "resume.pdf"
CACHE_FILENAME = "cover_letters.json"


def _clean_path(value: str) -> Path:
    # Remove quotes if present and expand ~ to home directory
    return Path(value.strip('"').strip("'")).expanduser().resolve()


def get_data_directory() -> Path:
    """Get the data directory from environment or default location.

    Returns:
        Path: Resolved data directory path

    Examples:
        >>> # With DATA_DIR set to ~/cover-letters
        >>> get_data_directory()
        PosixPath('/Users/username/cover-letters')

        >>> # Without DATA_DIR (relative to the working directory)
        >>> get_data_directory()
        PosixPath('/srv/app/data')
    """
    data_dir_env = os.getenv("DATA_DIR")
    if data_dir_env:
        return _clean_path(data_dir_env)
    return (Path.cwd() / "data").resolve()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PipelineConfig:
    """Settings injected into the pipeline components."""

    resume_path: Path
    cache_path: Path
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    reasoning_effort: str = DEFAULT_REASONING_EFFORT
    timeout: float = DEFAULT_TIMEOUT
    strict_cache: bool = False
    signature: Signature = field(default_factory=Signature)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build a config from environment variables (and ``.env``).

        Raises:
            ValueError: If MODEL_TIMEOUT is not a positive number
        """
        data_dir = get_data_directory()

        resume_env = os.getenv("RESUME_PATH")
        resume_path = _clean_path(resume_env) if resume_env else data_dir / RESUME_FILENAME

        cache_env = os.getenv("COVER_LETTER_CACHE_PATH")
        cache_path = _clean_path(cache_env) if cache_env else data_dir / CACHE_FILENAME

        timeout_env = os.getenv("MODEL_TIMEOUT")
        if timeout_env:
            try:
                timeout = float(timeout_env)
            except ValueError as e:
                raise ValueError(f"MODEL_TIMEOUT must be a number, got {timeout_env!r}") from e
            if timeout <= 0:
                raise ValueError(f"MODEL_TIMEOUT must be positive, got {timeout_env!r}")
        else:
            timeout = DEFAULT_TIMEOUT

        default_signature = Signature()
        signature = Signature(
            name=os.getenv("USER_NAME") or default_signature.name,
            phone=os.getenv("USER_PHONE") or default_signature.phone,
            email=os.getenv("USER_EMAIL") or default_signature.email,
        )

        return cls(
            resume_path=resume_path,
            cache_path=cache_path,
            # OPEN_AI_KEY is the legacy variable name
            api_key=os.getenv("OPENAI_API_KEY") or os.getenv("OPEN_AI_KEY"),
            model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            reasoning_effort=os.getenv("REASONING_EFFORT", DEFAULT_REASONING_EFFORT),
            timeout=timeout,
            strict_cache=_env_flag("STRICT_CACHE"),
            signature=signature,
        )
