"""
Server entry point and Composition Root.

Secrets are fetched from AWS Secrets Manager (when ASSISTANT_SECRET_ARN is set)
before settings are read, so GROQ_API_KEY and LANGFUSE_* may live in AWS.
All adapters are wired once at startup and shared by every request; none of
them holds per-request state.

Run:
    ir-assistant
or:
    uvicorn ir_assistant.infrastructure.entrypoints.server:app --port 3000
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Secret bootstrap: must run before settings and Langfuse read the environment
# ---------------------------------------------------------------------------
_secret_arn = os.environ.get("ASSISTANT_SECRET_ARN")
if _secret_arn:
    from ir_assistant.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
    SecretsManagerAdapter().load_into_env(_secret_arn)

# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
import uvicorn  # noqa: E402

from ir_assistant.application.agent.graph import build_chat_graph  # noqa: E402
from ir_assistant.application.use_cases.get_realtime_quote import GetRealtimeQuoteUseCase  # noqa: E402
from ir_assistant.application.use_cases.run_chat import RunChatUseCase  # noqa: E402
from ir_assistant.infrastructure.config.settings import load_settings  # noqa: E402
from ir_assistant.infrastructure.entrypoints.fastapi_app import create_app  # noqa: E402
from ir_assistant.infrastructure.llm.openai_compatible_adapter import OpenAICompatibleChatAdapter  # noqa: E402
from ir_assistant.infrastructure.logging.logger import setup_logger  # noqa: E402
from ir_assistant.infrastructure.stock_data.yahoo_chart_adapter import YahooChartQuoteProvider  # noqa: E402

settings = load_settings()
logger = setup_logger(settings.log_level, settings.log_file)

_quote_provider = YahooChartQuoteProvider(
    base_url=settings.quote_base_url,
    timeout=settings.quote_timeout,
)
_llm = OpenAICompatibleChatAdapter(
    api_key=settings.completion_api_key,
    base_url=settings.completion_base_url,
    model=settings.completion_model,
    timeout=settings.completion_timeout,
)
_observability = None
if settings.langfuse_enabled:
    from ir_assistant.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler
    _observability = LangfuseObservabilityHandler()

_graph = build_chat_graph(GetRealtimeQuoteUseCase(_quote_provider), _llm)
_chat_use_case = RunChatUseCase(_graph, _observability)

app = create_app(
    _chat_use_case,
    observability=_observability,
    cors_origins=settings.cors_origins,
    shutdown_hooks=[_quote_provider.close],
)


def main() -> None:
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
