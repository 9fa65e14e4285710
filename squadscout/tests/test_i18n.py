from __future__ import annotations

from i18n.i18n import I18nManager


def test_bundled_translations_are_loaded() -> None:
    manager = I18nManager()
    manager.load_translations()

    assert manager.available_languages()[:2] == ["en", "uk"]
    assert manager.translate("servers.status.found", count=3) == "Servers: 3"


def test_ukrainian_strings_and_unknown_keys() -> None:
    manager = I18nManager()
    manager.load_translations()
    manager.set_language("uk", emit_signal=False)

    assert manager.translate("servers.status.found", count=7) == "Серверів: 7"
    assert manager.translate("no.such.key") == "no.such.key"


def test_unknown_language_keeps_default() -> None:
    manager = I18nManager()
    manager.load_translations()

    manager.set_language("xx", emit_signal=False)

    assert manager.current_language == "en"
