"""
LangGraph chat pipeline factory.

Dependency-injection contract:
  - Receives the quote use-case and an ILanguageModel.
  - Never imports httpx, openai, langfuse, or boto3 directly.
  - langchain_core and langgraph are treated as orchestration-framework imports,
    acceptable in the application layer.

Flow:
    extract_symbol -> [fetch_quote] -> compose_prompt -> complete -> assemble_reply

fetch_quote only runs when a symbol was detected. Exceptions raised by the
completion node propagate out of graph.invoke() unchanged.
"""

import logging

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from ir_assistant.application.agent.prompts import compose_turns
from ir_assistant.application.agent.state import ChatState
from ir_assistant.application.services.intent_extractor import extract_stock_symbol
from ir_assistant.application.services.response_assembler import assemble_reply
from ir_assistant.application.use_cases.get_realtime_quote import GetRealtimeQuoteUseCase
from ir_assistant.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


def build_chat_graph(quote_use_case: GetRealtimeQuoteUseCase, llm: ILanguageModel):
    """Build and compile the chat enrichment graph.

    Args:
        quote_use_case: Use-case wrapping the injected IQuoteProvider.
        llm:            ILanguageModel implementation, injected; no direct SDK reference.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for invoke() calls.
    """

    def extract_symbol(state: ChatState) -> dict:
        symbol = extract_stock_symbol(state["message"])
        if symbol:
            logger.info("Detected stock symbol request: %s", symbol)
        else:
            logger.debug("No stock symbol detected in message")
        return {"symbol": symbol}

    def fetch_quote(state: ChatState) -> dict:
        quote = quote_use_case.execute(state["symbol"])
        if quote is None:
            logger.info("No quote available for %s; answering without it", state["symbol"])
        return {"quote": quote}

    def compose_prompt(state: ChatState) -> dict:
        turns = compose_turns(
            state["message"],
            state.get("history", []),
            state.get("quote"),
        )
        return {"turns": turns}

    def complete(state: ChatState, config: RunnableConfig) -> dict:
        return {"completion": llm.invoke(state["turns"], config=config)}

    def assemble(state: ChatState) -> dict:
        return {"reply": assemble_reply(state["completion"], state.get("quote"))}

    def route_after_extraction(state: ChatState) -> str:
        return "fetch_quote" if state.get("symbol") else "compose_prompt"

    workflow = StateGraph(ChatState)
    workflow.add_node("extract_symbol", extract_symbol)
    workflow.add_node("fetch_quote", fetch_quote)
    workflow.add_node("compose_prompt", compose_prompt)
    workflow.add_node("complete", complete)
    workflow.add_node("assemble_reply", assemble)
    workflow.add_edge(START, "extract_symbol")
    workflow.add_conditional_edges(
        "extract_symbol", route_after_extraction, ["fetch_quote", "compose_prompt"]
    )
    workflow.add_edge("fetch_quote", "compose_prompt")
    workflow.add_edge("compose_prompt", "complete")
    workflow.add_edge("complete", "assemble_reply")
    workflow.add_edge("assemble_reply", END)
    return workflow.compile()
