"""Test localized string tables."""

import pytest

from core.i18n import MESSAGES, Locale, Messages, messages_for, pluralize_cases, resolve_locale, sort_options


class TestLocales:
    """Every locale carries a complete message table."""

    def test_every_locale_has_messages(self):
        assert set(MESSAGES) == set(Locale)

    def test_incomplete_translation_fails_on_construction(self):
        with pytest.raises(TypeError):
            Messages(city="Ville")

    def test_resolve_locale(self):
        assert resolve_locale("ES") is Locale.ES
        assert resolve_locale(" ht ") is Locale.HT
        assert resolve_locale(Locale.ES) is Locale.ES
        assert resolve_locale("fr") is Locale.EN
        assert resolve_locale(None) is Locale.EN

    def test_messages_for(self):
        assert messages_for("es").judge_not_found == "Juez no encontrado"
        assert messages_for("ht").asylum_granted == "Azil Akòde"


class TestSortOptions:
    """Dropdown options keep policy values and localize labels."""

    def test_values_are_stable_across_locales(self):
        values = [o["value"] for o in sort_options("en")]
        assert values == ["approvalHigh", "approvalLow", "casesHigh", "casesLow", "alpha"]
        assert [o["value"] for o in sort_options("es")] == values

    def test_labels_are_localized(self):
        assert sort_options("en")[-1]["label"] == "Alphabetical"
        assert sort_options("es")[-1]["label"] == "Alfabético"
        assert sort_options("ht")[0]["label"] == "To Apwobasyon (Wo a Ba)"


def test_pluralize_cases():
    msgs = messages_for("en")
    assert pluralize_cases(msgs, 1) == "case"
    assert pluralize_cases(msgs, 0) == "cases"
    assert pluralize_cases(msgs, 2) == "cases"
