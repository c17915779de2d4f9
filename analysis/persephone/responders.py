"""
PERSEPHONE - Responder strategies

Answers chat messages for the serving layer. Strategies are tried in a
fixed order; the first available one that produces a reply wins.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

from morpheus.board import OpportunityBoard
from shared import ComponentLogger

FALLBACK_REPLY = "Sorry, I could not produce an answer right now."


@dataclass
class ChatReply:
    """Reply produced by a responder."""
    response: str
    agent: str
    timestamp_ms: int
    error: str | None = None

    def to_dict(self) -> dict:
        data = {
            "response": self.response,
            "agent": self.agent,
            "timestamp_ms": self.timestamp_ms,
        }
        if self.error:
            data["error"] = self.error
        return data


class AgentRuntime(Protocol):
    """External conversational runtime."""

    async def process_message(self, text: str, user_id: str, room_id: str) -> Any:
        ...


class ResponderStrategy(ABC):
    """One way of answering a message."""

    name: str = "responder"

    def is_available(self) -> bool:
        return True

    @abstractmethod
    async def respond(self, message: str, user_id: str) -> ChatReply | None:
        """Return a reply, or None when this strategy cannot answer."""

    def _reply(self, text: str) -> ChatReply:
        return ChatReply(
            response=text,
            agent=self.name,
            timestamp_ms=int(time.time() * 1000),
        )


class AgentRuntimeResponder(ResponderStrategy):
    """Delegates to an injected agent runtime."""

    name = "agent-runtime"

    def __init__(self, runtime: AgentRuntime | None = None, room_id: str = "web-chat"):
        self.runtime = runtime
        self.room_id = room_id

    def is_available(self) -> bool:
        return self.runtime is not None

    async def respond(self, message: str, user_id: str) -> ChatReply | None:
        result = await self.runtime.process_message(message, user_id, self.room_id)
        text = _extract_text(result)
        if not text:
            return None
        return self._reply(text)


def _extract_text(result: Any) -> str | None:
    if isinstance(result, str):
        return result.strip() or None
    if isinstance(result, dict):
        content = result.get("content")
        if isinstance(content, dict):
            content = content.get("text")
        if isinstance(content, str):
            return content.strip() or None
        text = result.get("text")
        if isinstance(text, str):
            return text.strip() or None
    return None


class OpportunityResponder(ResponderStrategy):
    """Answers questions about the currently published opportunities."""

    name = "opportunities"

    def __init__(self, board: OpportunityBoard, max_items: int = 3):
        self.board = board
        self.max_items = max_items
        self.keywords = ["opportunit", "current", "best", "spread", "now"]

    async def respond(self, message: str, user_id: str) -> ChatReply | None:
        text_lower = message.lower()
        if not any(kw in text_lower for kw in self.keywords):
            return None

        snapshot = self.board.current()
        if snapshot.updated_at_ms is None:
            return self._reply("No scan has completed yet. Please check back shortly.")
        if not snapshot.opportunities:
            return self._reply("No validated arbitrage opportunities in the latest scan.")

        lines = [f"Top opportunities from scan #{snapshot.cycle}:"]
        for opp in snapshot.opportunities[:self.max_items]:
            lines.append(
                f"- {opp.asset}: buy on {opp.buy_source} at ${opp.buy_price:,.4f}, "
                f"sell on {opp.sell_source} at ${opp.sell_price:,.4f} "
                f"({opp.gross_profit_pct:.2f}%, est. net ${opp.net_profit:,.2f}, "
                f"{opp.confidence.value} confidence)"
            )
        return self._reply("\n".join(lines))


class KeywordResponder(ResponderStrategy):
    """Rule-based answers keyed on words in the message."""

    name = "basic"

    DEFAULT_TOPICS = [
        (("hello",), (
            "Hello! I watch prices across venues and flag arbitrage "
            "opportunities. Ask me about arbitrage, risk, gas or strategy."
        )),
        (("arbitrage",), (
            "Arbitrage profits from the same asset trading at different prices "
            "on different venues: buy where it is cheap, sell where it is "
            "expensive. Execution speed matters, and fees and gas must be "
            "smaller than the spread."
        )),
        (("risk",), (
            "Main risks: gas spikes, slippage on large orders, thin liquidity, "
            "smart contract bugs, MEV front-running and stale or wrong price "
            "feeds. Implausibly large spreads usually mean bad data."
        )),
        (("gas",), (
            "To keep gas costs down: watch gas prices, trade when the network "
            "is quiet, use layer-2 networks, batch transactions and set sane "
            "gas limits. A spread is only worth it if it beats the gas bill."
        )),
        (("defi",), (
            "Common DeFi arbitrage: price gaps between DEXs, lending rate gaps "
            "between protocols, flash-loan funded trades and stablecoin "
            "de-pegs. Each carries a different risk profile."
        )),
        (("strategy", "strategies"), (
            "Start with cross-venue spreads on liquid majors and stablecoins, "
            "size trades so the edge survives costs, and treat any spread far "
            "above normal as a data problem until proven otherwise."
        )),
        (("exchange", "venue", "dex"), (
            "Centralized exchanges offer deep liquidity and low fees but hold "
            "your funds. DEXs are permissionless but cost gas and suffer "
            "slippage. Arbitrage usually uses both."
        )),
        (("start", "begin"), (
            "Getting started: learn the basics, set up a wallet and exchange "
            "accounts, begin with small sizes, and only scale once the numbers "
            "hold up after costs."
        )),
    ]

    DEFAULT_HELP = (
        "I can help with: arbitrage basics, DeFi strategies, risk management, "
        "saving on gas, choosing exchanges, getting started, and the current "
        "opportunities."
    )

    def __init__(self, topics=None, help_text: str | None = None):
        self.topics = list(topics) if topics is not None else list(self.DEFAULT_TOPICS)
        self.help_text = help_text or self.DEFAULT_HELP

    async def respond(self, message: str, user_id: str) -> ChatReply | None:
        text_lower = message.lower()
        for keywords, answer in self.topics:
            if any(kw in text_lower for kw in keywords):
                return self._reply(answer)
        return self._reply(self.help_text)


class ResponderChain:
    """Ordered fallback over responder strategies."""

    def __init__(self, strategies: list[ResponderStrategy]):
        self.logger = ComponentLogger("PERSEPHONE")
        self.strategies = list(strategies)

        # Statistics
        self.messages_handled = 0
        self.strategy_errors = 0
        self.replies_by_strategy: dict[str, int] = {}

    async def respond(self, message: str, user_id: str = "user") -> ChatReply:
        """Reply with the first strategy that can answer."""
        self.messages_handled += 1
        errors = []

        for strategy in self.strategies:
            if not strategy.is_available():
                continue
            try:
                reply = await strategy.respond(message, user_id)
            except Exception as e:
                self.strategy_errors += 1
                errors.append(f"{strategy.name}: {e}")
                self.logger.warning(
                    "Responder failed, falling back",
                    strategy=strategy.name,
                    error=str(e) or type(e).__name__,
                )
                continue

            if reply is not None:
                self.replies_by_strategy[strategy.name] = (
                    self.replies_by_strategy.get(strategy.name, 0) + 1
                )
                return reply

        return ChatReply(
            response=FALLBACK_REPLY,
            agent="fallback",
            timestamp_ms=int(time.time() * 1000),
            error="; ".join(errors) or None,
        )

    def describe(self) -> list[dict]:
        """Strategies in order with their availability."""
        return [
            {"name": s.name, "available": s.is_available()}
            for s in self.strategies
        ]

    def get_stats(self) -> dict:
        """Get responder statistics."""
        return {
            "messages_handled": self.messages_handled,
            "strategy_errors": self.strategy_errors,
            "replies_by_strategy": dict(self.replies_by_strategy),
        }


def build_default_chain(
    board: OpportunityBoard,
    runtime: AgentRuntime | None = None,
) -> ResponderChain:
    """Agent runtime first, then live opportunities, then keyword rules."""
    return ResponderChain([
        AgentRuntimeResponder(runtime),
        OpportunityResponder(board),
        KeywordResponder(),
    ])
