"""Tests for the language preference and its stores."""

import json
from unittest.mock import MagicMock, patch

from modules.i18n import (
    FilePreferenceStore,
    InMemoryPreferenceStore,
    Language,
    LanguagePreference,
    PREFERENCE_KEY,
    get_language_preference,
    reset_language_preference,
)


class TestLanguagePreference:
    def test_defaults_when_unset(self):
        preference = LanguagePreference(InMemoryPreferenceStore())
        assert preference.get_preferred() == Language.EN

    def test_custom_default(self):
        preference = LanguagePreference(InMemoryPreferenceStore(), default=Language.ID)
        assert preference.default == Language.ID
        assert preference.get_preferred() == Language.ID

    def test_round_trip(self):
        store = InMemoryPreferenceStore()
        preference = LanguagePreference(store)
        preference.set_preferred(Language.ID)

        assert preference.get_preferred() == Language.ID
        assert store.get_item(PREFERENCE_KEY) == "id"

    def test_unknown_stored_value_falls_back(self):
        store = InMemoryPreferenceStore({PREFERENCE_KEY: "fr"})
        assert LanguagePreference(store).get_preferred() == Language.EN

    def test_read_error_falls_back(self):
        store = MagicMock()
        store.get_item.side_effect = OSError("disk gone")
        assert LanguagePreference(store).get_preferred() == Language.EN

    def test_write_error_is_not_raised(self):
        store = MagicMock()
        store.set_item.side_effect = OSError("read-only")
        LanguagePreference(store).set_preferred(Language.ID)
        store.set_item.assert_called_once_with(PREFERENCE_KEY, "id")


class TestFilePreferenceStore:
    def test_missing_file_reads_none(self, tmp_path):
        store = FilePreferenceStore(tmp_path / "prefs.json")
        assert store.get_item(PREFERENCE_KEY) is None

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        store = FilePreferenceStore(path)
        store.set_item(PREFERENCE_KEY, "id")

        assert store.get_item(PREFERENCE_KEY) == "id"
        assert json.loads(path.read_text()) == {PREFERENCE_KEY: "id"}

    def test_corrupt_file_falls_back_to_default(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json")
        preference = LanguagePreference(FilePreferenceStore(path))

        assert preference.get_preferred() == Language.EN

    def test_corrupt_file_is_overwritten_on_write(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]")
        FilePreferenceStore(path).set_item(PREFERENCE_KEY, "en")

        assert json.loads(path.read_text()) == {PREFERENCE_KEY: "en"}


class TestGetLanguagePreference:
    def test_uses_configured_store_and_default(self, tmp_path):
        reset_language_preference()
        with patch("modules.i18n.service.get_settings") as mock_settings:
            mock_settings.return_value.language_storage_path = str(tmp_path / "prefs.json")
            mock_settings.return_value.default_language = "id"
            preference = get_language_preference()

        assert preference.default == Language.ID
        preference.set_preferred(Language.EN)
        assert (tmp_path / "prefs.json").exists()

    def test_singleton(self):
        assert get_language_preference() is get_language_preference()
