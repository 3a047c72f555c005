"""HumanMeter — Multi-agent statement classifier."""

from humanmeter.systems.classifier.agents import (
    DEFAULT_AGENTS,
    AgentVerdict,
    ClassificationResult,
    LexicalAgent,
    MultiAgentClassifier,
    majority_category,
)

__all__ = [
    "AgentVerdict",
    "ClassificationResult",
    "DEFAULT_AGENTS",
    "LexicalAgent",
    "MultiAgentClassifier",
    "majority_category",
]
