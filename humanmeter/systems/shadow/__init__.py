"""HumanMeter — Shadow translation: adversarial paraphrase of euphemisms."""

from humanmeter.systems.shadow.translator import (
    SHADOW_RULES,
    ShadowResult,
    ShadowTranslator,
    risk_for,
)

__all__ = ["SHADOW_RULES", "ShadowResult", "ShadowTranslator", "risk_for"]
