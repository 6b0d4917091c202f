"""
FastAPI HTTP boundary for the chat pipeline.

create_app() receives an already-wired RunChatUseCase; the Composition Root
lives in server.py. Every response body is well-formed JSON: validation
failures return 400, completion failures are classified by the error mapper,
and quote failures never surface here.

Run locally:
    uvicorn ir_assistant.infrastructure.entrypoints.server:app --reload --port 3000
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Literal, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ir_assistant.application.services.error_mapper import map_error
from ir_assistant.application.use_cases.run_chat import RunChatUseCase
from ir_assistant.domain.entities.conversation import ConversationTurn
from ir_assistant.domain.entities.quote import Quote
from ir_assistant.domain.errors import InvalidChatRequestError
from ir_assistant.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)


class TurnModel(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    conversation_history: list[TurnModel] = Field(
        default_factory=list, alias="conversationHistory"
    )
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class StockData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: str
    change: str
    change_percent: str = Field(alias="changePercent")
    currency: str
    market_state: str = Field(alias="marketState")
    previous_close: str = Field(alias="previousClose")

    @classmethod
    def from_quote(cls, quote: Quote) -> "StockData":
        return cls(
            symbol=quote.symbol,
            price=quote.price_display,
            change=quote.change_display,
            change_percent=quote.change_percent_display,
            currency=quote.currency,
            market_state=quote.market_state,
            previous_close=quote.previous_close_display,
        )


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    success: bool
    stock_data: Optional[StockData] = Field(default=None, alias="stockData")


MESSAGE_REQUIRED = "Message is required"
INVALID_HISTORY = "conversationHistory must be a list of {role, content} turns"
INVALID_BODY = "Request body must be a JSON object"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "success": False})


def _validation_message(exc: RequestValidationError) -> str:
    """Name the first offending field the way the chat widget expects."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if "message" in loc:
            return MESSAGE_REQUIRED
        if "conversationHistory" in loc:
            return INVALID_HISTORY
    return INVALID_BODY


def create_app(
    chat_use_case: RunChatUseCase,
    observability: Optional[IObservabilityHandler] = None,
    cors_origins: Sequence[str] = ("*",),
    shutdown_hooks: Sequence[Callable[[], None]] = (),
) -> FastAPI:
    """Build the FastAPI application around an injected chat use-case.

    *shutdown_hooks* run once when the application stops (e.g. closing the
    quote provider's HTTP client).
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        for hook in shutdown_hooks:
            hook()
        if observability is not None:
            observability.flush()

    app = FastAPI(title="Investor Relations Assistant API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed chat request: %s", exc.errors())
        return _error_response(400, _validation_message(exc))

    @app.post("/chat")
    def chat(body: ChatRequest):
        """Answer one message, enriching it with a live quote when it asks for a price."""
        history = [
            ConversationTurn(role=turn.role, content=turn.content)
            for turn in body.conversation_history
        ]
        try:
            reply = chat_use_case.execute(
                body.message, history, session_id=body.session_id
            )
        except InvalidChatRequestError as exc:
            return _error_response(400, str(exc))
        except Exception as exc:
            logger.exception("Chat request failed")
            outcome = map_error(exc)
            return _error_response(outcome.status_code, outcome.message)

        response = ChatResponse(
            message=reply.message,
            success=reply.success,
            stock_data=StockData.from_quote(reply.quote) if reply.quote else None,
        )
        return JSONResponse(content=response.model_dump(by_alias=True, exclude_none=True))

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app
