"""Tests for the email generation module."""

import random
import re
from unittest.mock import MagicMock

import pytest

from coldcraft.email_generator import TEMPLATES, EmailGenerator, generate_email
from coldcraft.models import FormFields, GeneratedEmail, Tone

PLACEHOLDER = re.compile(r"\{[a-z_]+\}")


def _pinned_rng(index: int) -> MagicMock:
    rng = MagicMock()
    rng.choice.side_effect = lambda seq: seq[index]
    return rng


def _minimal_fields(**overrides) -> FormFields:
    values = {
        "recipient_name": "Ana",
        "recipient_company": "Acme",
        "sender_name": "Sam",
        "sender_company": "Globex",
    }
    values.update(overrides)
    return FormFields(**values)


def _full_fields() -> FormFields:
    return FormFields(
        recipient_name="Ana",
        recipient_company="Acme",
        recipient_role="CTOs",
        sender_name="Sam",
        sender_company="Globex",
        purpose="Product demo",
        tone="friendly",
        industry="fintech",
        pain_point="manual reconciliation",
        value_proposition="automate month-end close",
    )


class TestTemplates:
    def test_exactly_two_templates(self):
        assert len(TEMPLATES) == 2
        assert [t.name for t in TEMPLATES] == ["growth_strategy", "recent_work"]

    def test_choice_is_over_all_templates(self):
        rng = _pinned_rng(0)
        generate_email(_minimal_fields(), rng=rng)
        rng.choice.assert_called_once_with(TEMPLATES)


class TestGrowthStrategyTemplate:
    def test_subject_falls_back_to_growth_strategy(self):
        email = generate_email(_minimal_fields(), rng=_pinned_rng(0))
        assert email.subject == "Quick question about Acme's growth strategy"
        assert email.template == "growth_strategy"

    def test_body_fallbacks(self):
        body = generate_email(_minimal_fields(), rng=_pinned_rng(0)).body
        assert body.startswith("Hi Ana,\n\n")
        assert "in the tech space" in body
        assert "streamline their operations and increase efficiency by 40%" in body
        assert (
            "I imagine scaling operations while maintaining quality might be "
            "challenging at your current growth rate."
        ) in body
        assert body.endswith("Best regards,\nSam\nGlobex")

    def test_uses_provided_values(self):
        email = generate_email(_full_fields(), rng=_pinned_rng(0))
        assert email.subject == "Quick question about Acme's manual reconciliation"
        assert "in the fintech space" in email.body
        assert "like yours automate month-end close." in email.body
        assert "I imagine dealing with manual reconciliation might be challenging at your scale." in email.body
        assert "growth rate" not in email.body

    def test_whitespace_pain_point_uses_fallback(self):
        email = generate_email(_minimal_fields(pain_point="   "), rng=_pinned_rng(0))
        assert email.subject.endswith("growth strategy")


class TestRecentWorkTemplate:
    def test_subject(self):
        email = generate_email(_minimal_fields(), rng=_pinned_rng(1))
        assert email.subject == "Ana, loved your recent work at Acme"
        assert email.template == "recent_work"

    def test_body_fallbacks(self):
        body = generate_email(_minimal_fields(), rng=_pinned_rng(1)).body
        assert "Acme's recent product launch" in body
        assert "I work with executives at companies like yours to optimize their growth strategies." in body
        assert "Many leaders I speak with are looking for ways to scale more efficiently." in body
        assert body.endswith("Looking forward to connecting,\nSam")

    def test_uses_provided_values(self):
        body = generate_email(_full_fields(), rng=_pinned_rng(1)).body
        assert "Acme's recent fintech" in body
        assert "I work with CTOs at companies like yours to automate month-end close." in body
        assert "Many leaders I speak with mention manual reconciliation as a key challenge." in body


class TestGenerateEmail:
    @pytest.mark.parametrize("index", [0, 1])
    def test_no_unresolved_placeholders(self, index):
        for fields in (_minimal_fields(), _full_fields(), FormFields(recipient_name="A", sender_name="B")):
            email = generate_email(fields, rng=_pinned_rng(index))
            assert not PLACEHOLDER.search(email.subject)
            assert not PLACEHOLDER.search(email.body)

    def test_braces_in_input_are_literal(self):
        email = generate_email(_minimal_fields(recipient_company="{sender_name}"), rng=_pinned_rng(0))
        assert email.subject == "Quick question about {sender_name}'s growth strategy"

    def test_copies_form_fields(self):
        fields = _full_fields()
        email = generate_email(fields, rng=_pinned_rng(0))

        assert isinstance(email, GeneratedEmail)
        assert email.tone == Tone.FRIENDLY
        assert email.recipient_info.name == "Ana"
        assert email.recipient_info.company == "Acme"
        assert email.recipient_info.role == "CTOs"
        assert email.sender_info.name == "Sam"
        assert email.sender_info.company == "Globex"
        assert email.metadata.industry == "fintech"
        assert email.metadata.purpose == "Product demo"
        assert email.metadata.pain_point == "manual reconciliation"
        assert email.metadata.value_proposition == "automate month-end close"

    def test_metadata_keeps_empty_values(self):
        email = generate_email(_minimal_fields(), rng=_pinned_rng(0))
        assert email.metadata.industry == ""
        assert email.recipient_info.role == ""

    def test_tone_defaults_to_professional(self):
        email = generate_email(_minimal_fields(), rng=_pinned_rng(1))
        assert email.tone == Tone.PROFESSIONAL

    def test_each_call_gets_new_id(self):
        a = generate_email(_minimal_fields(), rng=_pinned_rng(0))
        b = generate_email(_minimal_fields(), rng=_pinned_rng(0))
        assert a.id != b.id
        assert a.subject == b.subject

    def test_seeded_random_source(self):
        rng = random.Random(42)
        names = {generate_email(_minimal_fields(), rng=rng).template for _ in range(50)}
        assert names == {"growth_strategy", "recent_work"}


class TestEmailGenerator:
    def test_uses_injected_rng(self):
        generator = EmailGenerator(rng=_pinned_rng(1))
        assert generator.generate(_minimal_fields()).template == "recent_work"

    def test_default_rng(self):
        email = EmailGenerator().generate(_minimal_fields())
        assert email.template in {"growth_strategy", "recent_work"}
