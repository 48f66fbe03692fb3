# -*- coding: utf-8 -*-
"""
Tests for the Translation Manager.
"""

from services.translation_manager import get_language, set_language, tr


class TestTranslationManager:

    def test_indonesian_is_active(self):
        assert get_language() == "id"
        assert tr("wizard.button.next") == "Selanjutnya"

    def test_switch_to_english(self):
        set_language("en")

        assert tr("wizard.progress", current=2, total=4) == "Step 2 of 4"

    def test_unsupported_language_keeps_current(self):
        set_language("ar")

        assert get_language() == "id"

    def test_unknown_key_returns_key(self):
        assert tr("wizard.unknown.key") == "wizard.unknown.key"

    def test_missing_placeholder_returns_template(self):
        assert tr("wizard.progress", current=1) == "Langkah {current} dari {total}"
