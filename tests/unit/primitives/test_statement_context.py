"""
Unit tests for StatementContext.

Context comes from untrusted callers (HTTP bodies, web client state), so
every malformed value must fall back to its default instead of raising.
"""

from __future__ import annotations

import pytest

from humanmeter.primitives.statement import Domain, StatementContext


class TestDefaults:
    def test_empty_mapping_gives_defaults(self):
        ctx = StatementContext.from_mapping({})
        assert ctx.domain == Domain.UNIVERSAL
        assert ctx.actual_load == 1.0
        assert ctx.trust_layers == 1
        assert ctx.verification_level is None

    def test_none_gives_defaults(self):
        assert StatementContext.coerce(None) == StatementContext()

    def test_existing_context_passes_through(self):
        ctx = StatementContext(domain=Domain.LEGAL)
        assert StatementContext.coerce(ctx) is ctx

    def test_is_frozen(self):
        ctx = StatementContext()
        with pytest.raises(Exception):
            ctx.actual_load = 50.0  # type: ignore[misc]


class TestFromMapping:
    def test_accepts_camel_case_keys(self):
        ctx = StatementContext.from_mapping(
            {"actualLoad": 20, "trustLayers": 7, "verificationLevel": 0.4},
        )
        assert ctx.actual_load == 20.0
        assert ctx.trust_layers == 7
        assert ctx.verification_level == 0.4

    def test_accepts_snake_case_keys(self):
        ctx = StatementContext.from_mapping({"actual_load": 12.5, "domain": "medical"})
        assert ctx.actual_load == 12.5
        assert ctx.domain == Domain.MEDICAL

    def test_domain_is_case_insensitive(self):
        assert StatementContext.from_mapping({"domain": " Engineering "}).domain == Domain.ENGINEERING

    def test_unknown_keys_are_ignored(self):
        ctx = StatementContext.from_mapping({"mood": "grumpy", "actualLoad": 3})
        assert ctx.actual_load == 3.0

    def test_none_values_fall_back(self):
        ctx = StatementContext.from_mapping({"actualLoad": None, "domain": None})
        assert ctx == StatementContext()


class TestLenientCoercion:
    @pytest.mark.parametrize("value", ["heavy", -5, 0, float("nan"), float("inf"), True, [1]])
    def test_bad_load_falls_back(self, value):
        assert StatementContext.from_mapping({"actualLoad": value}).actual_load == 1.0

    @pytest.mark.parametrize("value", ["many", 0, -3, None])
    def test_bad_trust_layers_fall_back(self, value):
        assert StatementContext.from_mapping({"trustLayers": value}).trust_layers == 1

    def test_numeric_strings_are_accepted(self):
        ctx = StatementContext.from_mapping({"actualLoad": "15", "trustLayers": "6"})
        assert ctx.actual_load == 15.0
        assert ctx.trust_layers == 6

    def test_fractional_trust_layers_truncate(self):
        assert StatementContext.from_mapping({"trustLayers": 7.9}).trust_layers == 7

    def test_unknown_domain_falls_back_to_universal(self):
        assert StatementContext.from_mapping({"domain": "astrology"}).domain == Domain.UNIVERSAL

    def test_verification_level_is_clamped(self):
        assert StatementContext.from_mapping({"verificationLevel": 2}).verification_level == 1.0
        assert StatementContext.from_mapping({"verificationLevel": -1}).verification_level == 0.0

    def test_garbage_verification_level_is_none(self):
        assert StatementContext.from_mapping({"verificationLevel": "high"}).verification_level is None
