"""
Infrastructure adapter: Langfuse → IObservabilityHandler.

Every chat run is traced under the "ir-assistant" tag and grouped by the
caller's session id, when one is given. The Langfuse-specific metadata keys
stay in this module; the chat use case only receives an opaque run config.

langfuse is imported on construction, not at module load, so the server can
skip tracing entirely when LANGFUSE_PUBLIC_KEY is absent.
"""

import logging
from typing import Any, Optional, Sequence

from ir_assistant.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)

TRACE_TAGS = ("ir-assistant",)


class LangfuseObservabilityHandler(IObservabilityHandler):
    def __init__(self, tags: Sequence[str] = TRACE_TAGS) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()
        self._tags = list(tags)

    def run_config(self, session_id: Optional[str] = None) -> dict[str, Any]:
        metadata: dict[str, Any] = {"langfuse_tags": list(self._tags)}
        if session_id:
            metadata["langfuse_session_id"] = session_id
        return {"callbacks": [self._handler], "metadata": metadata}

    def flush(self) -> None:
        from langfuse import get_client
        logger.debug("Flushing Langfuse traces")
        get_client().flush()
