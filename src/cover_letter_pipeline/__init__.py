"""Cover Letter Pipeline - resume + job description to a cached, AI-written cover letter."""

__version__ = "0.1.0"

# Expose main classes and functions for external use
from .cache import CacheEntry, ResponseCache
from .config import PipelineConfig
from .errors import (
    CacheCorruptError,
    CacheWriteError,
    EmptyModelResponse,
    MissingInput,
    ModelInvocationError,
    PipelineError,
    ResumeParseError,
    ResumeReadError,
)
from .model import ModelInvoker, create_openai_client
from .pipeline import PipelineController, build_pipeline
from .prompts import Signature, build_prompt, render_task
from .resume import ResumeExtractor

__all__ = [
    "PipelineController",
    "build_pipeline",
    "PipelineConfig",
    "ResumeExtractor",
    "build_prompt",
    "render_task",
    "Signature",
    "ModelInvoker",
    "create_openai_client",
    "ResponseCache",
    "CacheEntry",
    "PipelineError",
    "MissingInput",
    "ResumeReadError",
    "ResumeParseError",
    "ModelInvocationError",
    "EmptyModelResponse",
    "CacheWriteError",
    "CacheCorruptError",
]
