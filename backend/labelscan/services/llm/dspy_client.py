import time
from typing import Any

import dspy

from labelscan.config import settings
from labelscan.logging import get_logger
from labelscan.utils.timing import _format_duration

logger = get_logger(__name__)


def _make_lm(model: str, max_tokens: int = 1024) -> dspy.LM:
    return dspy.LM(
        f"{settings.llm_provider}/{model}",
        api_key=settings.llm_api_key,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout_s,
        max_tokens=max_tokens,
    )


def configure_dspy() -> None:
    lm = _make_lm(settings.llm_model)
    dspy.settings.configure(lm=lm, trace=[])
    logger.info("llm.configure provider=%s model=%s", settings.llm_provider, settings.llm_model)


def run_with_logging(
    prompt_name: str,
    prompt_version: str,
    fn: Any,
    **kwargs: Any,
) -> Any:
    start = time.time()
    logger.info(
        "[TIMING] llm.call.start name=%s version=%s model=%s", prompt_name, prompt_version, settings.llm_model
    )
    result = fn(**kwargs)
    latency_ms = int((time.time() - start) * 1000)
    logger.debug("llm.call.io name=%s input=%s output=%s", prompt_name, kwargs, result)
    logger.info(
        "[TIMING] llm.call.end name=%s latency_ms=%s (%s)",
        prompt_name,
        latency_ms,
        _format_duration(latency_ms),
    )
    return result
