"""Tests for the Streamlit UI flows."""

import pytest
from streamlit.testing.v1 import AppTest


@pytest.fixture
def app(monkeypatch, tmp_path):
    monkeypatch.setenv("COLDCRAFT_GENERATION_DELAY", "0")
    monkeypatch.setenv("COLDCRAFT_EXPORT_DIR", str(tmp_path))
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    return at


def _generate(at: AppTest, recipient: str = "Jane Doe", sender: str = "Sam Smith"):
    at.text_input(key="recipient_name").set_value(recipient)
    at.text_input(key="recipient_company").set_value("Acme Corp")
    at.text_input(key="sender_name").set_value(sender)
    at.text_input(key="sender_company").set_value("Globex")
    at.run()
    generate = next(b for b in at.button if b.label == "Generate Email")
    generate.click().run()
    return at.session_state["session"].list_emails()[0]


class TestGenerate:
    def test_generated_email_is_listed(self, app):
        email = _generate(app)

        assert not app.exception
        assert email.recipient_info.name == "Jane Doe"
        assert len(app.session_state["session"].list_emails()) == 1


class TestCreateSequence:
    def test_form_is_cleared_after_create(self, app):
        email = _generate(app)

        app.button(key=f"toggle_{email.id}").click().run()
        assert app.session_state["selected_ids"] == [email.id]
        assert app.button(key=f"toggle_{email.id}").label.startswith("[1] ")

        app.text_input(key="sequence_name").set_value("Q3 Outreach")
        app.text_area(key="sequence_description").set_value("Intro then nudge")
        app.run()
        app.button(key="create_sequence").click().run()

        assert not app.exception
        sequences = app.session_state["session"].list_sequences()
        assert [s.name for s in sequences] == ["Q3 Outreach"]
        assert sequences[0].description == "Intro then nudge"
        assert app.text_input(key="sequence_name").value == ""
        assert app.text_area(key="sequence_description").value == ""
        assert app.session_state["selected_ids"] == []
        assert not app.button(key=f"toggle_{email.id}").label.startswith("[")
        assert any("Q3 Outreach" in s.value for s in app.success)

    def test_button_disabled_without_name(self, app):
        email = _generate(app)
        app.button(key=f"toggle_{email.id}").click().run()

        assert app.button(key="create_sequence").disabled


class TestPreviewTab:
    def test_default_view_shows_participants(self, app):
        email = _generate(app)

        texts = [t.value for t in app.text]
        assert any(
            t.startswith("From: Sam Smith <sam.smith@globex.com>\nTo: Jane Doe <jane.doe@acmecorp.com>\n")
            and f"Subject: {email.subject}" in t
            for t in texts
        )
