"""
HumanMeter — Shadow Translator

Rewrites euphemisms as the blunter claims they can stand in for
("ensure safety" → "[ENFORCE CONTROL]") to surface rhetorical risk.

All rules are compiled into one alternation and applied in a single pass
over the original text. A replacement is never rescanned, so no rule can
act on another rule's output. When two rules match at the same position
the one declared first wins.
"""

from __future__ import annotations

import re

from pydantic import Field

from humanmeter.primitives.common import FrozenModel, RiskLevel

SHADOW_RULES: tuple[tuple[str, str], ...] = (
    (r"ensure safety", "ENFORCE CONTROL"),
    (r"greater good", "JUSTIFY AUTHORITY"),
    (r"protect community", "POLICE BOUNDARIES"),
    (r"\balign(?:ment)?\b", "SUBMIT/SUBMISSION"),
    (r"consensus", "SUPPRESS DISSENT"),
    (r"we need to", "I WANT TO"),
    (r"\bmust\b", "WILL FORCE"),
)


class ShadowResult(FrozenModel):
    original_text: str
    transformed_text: str
    substitution_count: int = Field(ge=0)
    risk_level: RiskLevel


def risk_for(count: int) -> RiskLevel:
    if count > 2:
        return RiskLevel.HIGH
    if count > 0:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


class ShadowTranslator:
    def __init__(self, rules: tuple[tuple[str, str], ...] = SHADOW_RULES) -> None:
        self._shadows = [shadow for _, shadow in rules]
        self._combined = re.compile(
            "|".join(f"(?P<r{i}>{pattern})" for i, (pattern, _) in enumerate(rules)),
            re.IGNORECASE,
        )

    def translate(self, text: str) -> ShadowResult:
        count = 0

        def _replace(match: re.Match[str]) -> str:
            nonlocal count
            count += 1
            index = int(match.lastgroup[1:]) if match.lastgroup else 0
            return f"[{self._shadows[index]}]"

        transformed = self._combined.sub(_replace, text) if self._shadows else text
        return ShadowResult(
            original_text=text,
            transformed_text=transformed,
            substitution_count=count,
            risk_level=risk_for(count),
        )
