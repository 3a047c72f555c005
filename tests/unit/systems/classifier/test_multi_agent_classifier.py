"""
Unit tests for the MultiAgentClassifier.

Four agents vote; the majority wins and ties go to the earliest agent.
"""

from __future__ import annotations

import re

import pytest

from humanmeter.primitives.common import Category
from humanmeter.systems.classifier.agents import (
    DEFAULT_AGENTS,
    AgentVerdict,
    LexicalAgent,
    MultiAgentClassifier,
    majority_category,
)


def _verdict(name: str, category: Category, confidence: float = 0.5) -> AgentVerdict:
    return AgentVerdict(agent_name=name, category=category, confidence=confidence)


# ─── Tests: Agents ────────────────────────────────────────────────────────────


class TestLexicalAgent:
    def test_fixed_agent_order(self):
        assert [a.name for a in DEFAULT_AGENTS] == [
            "Literalist", "Contextualist", "Skeptic", "Visionary",
        ]

    def test_match_votes_own_category(self):
        skeptic = DEFAULT_AGENTS[2]
        verdict = skeptic.judge("You ALWAYS say that")
        assert verdict.category == Category.LIE
        assert verdict.confidence == 0.9

    def test_no_match_votes_unclear(self):
        verdict = DEFAULT_AGENTS[0].judge("hello world")
        assert verdict.category == Category.UNCLEAR
        assert verdict.confidence == 0.5
        assert verdict.agent_name == "Literalist"


class TestMajorityCategory:
    def test_tie_goes_to_earliest_agent(self):
        verdicts = [_verdict("a", Category.SYMBOL), _verdict("b", Category.LIE)]
        assert majority_category(verdicts) == (Category.SYMBOL, 1)

    def test_most_frequent_wins(self):
        verdicts = [
            _verdict("a", Category.FACT),
            _verdict("b", Category.LIE),
            _verdict("c", Category.LIE),
        ]
        assert majority_category(verdicts) == (Category.LIE, 2)

    def test_empty_verdicts_raise(self):
        with pytest.raises(ValueError):
            majority_category([])


# ─── Tests: Classifier ────────────────────────────────────────────────────────


class TestMultiAgentClassifier:
    def test_no_signal_is_unanimous_unclear(self):
        result = MultiAgentClassifier().classify("hello world")
        assert result.category == Category.UNCLEAR
        assert result.confidence == 0.5
        assert result.consensus_strength == 1.0
        assert result.dissent == ()
        assert len(result.verdicts) == 4

    def test_single_detector_is_outvoted(self):
        result = MultiAgentClassifier().classify("I observe 3 birds")
        assert result.category == Category.UNCLEAR
        assert result.consensus_strength == 0.75
        assert [(v.agent_name, v.category) for v in result.dissent] == [
            ("Literalist", Category.FACT),
        ]

    def test_two_detectors_halve_consensus(self):
        result = MultiAgentClassifier().classify("like always")
        assert result.category == Category.UNCLEAR
        assert result.consensus_strength == 0.5

    def test_four_way_split_goes_to_literalist(self):
        # FACT, SYMBOL, LIE, UNCLEAR: each counted once
        result = MultiAgentClassifier().classify("3 apples as symbols always")
        assert result.category == Category.FACT
        assert result.confidence == 0.85
        assert result.consensus_strength == 0.25
        assert len(result.dissent) == 3

    def test_all_detectors_match(self):
        result = MultiAgentClassifier().classify("if 3 apples as symbols always")
        assert result.category == Category.FACT
        assert result.consensus_strength == 0.25
        assert {v.category for v in result.dissent} == {
            Category.SYMBOL, Category.LIE, Category.IMAGINATION,
        }

    @pytest.mark.parametrize("text", [
        "", "hello world", "I measure it", "we must always", "imagine if", "3 as must might",
    ])
    def test_consensus_takes_quarter_steps(self, text):
        assert MultiAgentClassifier().classify(text).consensus_strength in {0.25, 0.5, 0.75, 1.0}

    def test_custom_agents(self):
        agents = (
            LexicalAgent("Poet", re.compile(r"moon"), Category.SYMBOL, 0.6),
            LexicalAgent("Dreamer", re.compile(r"moon"), Category.IMAGINATION, 0.7),
            LexicalAgent("Lunar", re.compile(r"moon"), Category.SYMBOL, 0.8),
        )
        result = MultiAgentClassifier(agents).classify("The moon")
        assert result.category == Category.SYMBOL
        assert result.confidence == pytest.approx(0.7)
        assert result.consensus_strength == pytest.approx(2 / 3)

    def test_requires_an_agent(self):
        with pytest.raises(ValueError):
            MultiAgentClassifier(())
