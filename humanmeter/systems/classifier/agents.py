"""
HumanMeter — Multi-Agent Classifier

Four independent lexical agents each cast a vote on what kind of
statement they are reading. The majority category wins; consensus is
the share of agents that agree with it.

Agents, in fixed order:
  Literalist     — numbers and measurement language    → FACT
  Contextualist  — comparison and symbolic language    → SYMBOL
  Skeptic        — absolutist and obligatory language  → LIE
  Visionary      — conditional and hypothetical speech → IMAGINATION

An agent whose pattern does not match votes UNCLEAR at 0.5.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import Field, field_validator

from humanmeter.primitives.common import Category, FrozenModel

_ABSTAIN_CONFIDENCE = 0.5


class AgentVerdict(FrozenModel):
    agent_name: str
    category: Category
    confidence: float = Field(ge=0.0, le=1.0)


class ClassificationResult(FrozenModel):
    category: Category
    confidence: float = Field(ge=0.0, le=1.0)
    consensus_strength: float
    verdicts: tuple[AgentVerdict, ...]
    dissent: tuple[AgentVerdict, ...] = ()

    @field_validator("consensus_strength")
    @classmethod
    def _positive_share(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("consensus_strength must lie in (0, 1]")
        return value


@dataclass(frozen=True)
class LexicalAgent:
    name: str
    pattern: re.Pattern[str]
    category: Category
    confidence: float

    def judge(self, text: str) -> AgentVerdict:
        if self.pattern.search(text.lower()):
            return AgentVerdict(agent_name=self.name, category=self.category,
                                confidence=self.confidence)
        return AgentVerdict(agent_name=self.name, category=Category.UNCLEAR,
                            confidence=_ABSTAIN_CONFIDENCE)


DEFAULT_AGENTS: tuple[LexicalAgent, ...] = (
    LexicalAgent("Literalist", re.compile(r"\d+|measure|observe"), Category.FACT, 0.85),
    LexicalAgent("Contextualist", re.compile(r"like|as|represent|symbol"), Category.SYMBOL, 0.75),
    LexicalAgent("Skeptic", re.compile(r"always|never|everyone|must"), Category.LIE, 0.9),
    LexicalAgent("Visionary", re.compile(r"if|could|imagine|might"), Category.IMAGINATION, 0.8),
)


def majority_category(verdicts: Sequence[AgentVerdict]) -> tuple[Category, int]:
    """
    Most frequent category. A tie goes to the category of the earliest
    agent whose category reaches the top count.
    """
    counts = Counter(v.category for v in verdicts)
    top = max(counts.values())
    for verdict in verdicts:
        if counts[verdict.category] == top:
            return verdict.category, top
    raise ValueError("majority_category requires at least one verdict")


class MultiAgentClassifier:
    def __init__(self, agents: tuple[LexicalAgent, ...] = DEFAULT_AGENTS) -> None:
        if not agents:
            raise ValueError("MultiAgentClassifier needs at least one agent")
        self._agents = agents

    @property
    def agents(self) -> tuple[LexicalAgent, ...]:
        return self._agents

    def classify(self, text: str) -> ClassificationResult:
        verdicts = [agent.judge(text) for agent in self._agents]
        category, count = majority_category(verdicts)
        agreeing = [v for v in verdicts if v.category is category]
        return ClassificationResult(
            category=category,
            confidence=sum(v.confidence for v in agreeing) / count,
            consensus_strength=count / len(verdicts),
            verdicts=verdicts,
            dissent=[v for v in verdicts if v.category is not category],
        )
