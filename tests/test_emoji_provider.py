import pytest

from lancea.errors import ProviderError
from lancea.providers.emoji import EmojiProvider


def test_can_create_provider(emoji_provider):
    assert emoji_provider.id == "emoji"
    assert len(emoji_provider) > 10


def test_search_returns_results_for_joy(emoji_provider):
    results = emoji_provider.search("joy")
    assert results
    assert results[0].title == "Face with Tears of Joy"
    assert results[0].provider_id == "emoji"
    # exact shortcode match is the strongest signal
    assert results[0].score == 1.0


@pytest.mark.parametrize("query", ["/emoji joy", "/em joy", "  /emoji   JOY "])
def test_search_strips_command_prefix(emoji_provider, query):
    results = emoji_provider.search(query)
    assert results and results[0].key == "emoji:joy"


def test_search_em_prefix_smile(emoji_provider):
    results = emoji_provider.search("/em smile")
    assert any("Smiling" in r.title for r in results)


def test_search_is_case_insensitive(emoji_provider):
    lower = emoji_provider.search("smile")
    upper = emoji_provider.search("SMILE")
    assert lower
    assert [r.key for r in lower] == [r.key for r in upper]


def test_search_by_keyword(emoji_provider):
    results = emoji_provider.search("/emoji laugh")
    assert any(r.key == "emoji:joy" for r in results)


def test_search_results_are_sorted_by_score(emoji_provider):
    results = emoji_provider.search("smile")
    assert len(results) > 1
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_empty_search_browses_catalog_at_low_score(emoji_provider):
    results = emoji_provider.search("")
    assert len(results) == len(emoji_provider)
    assert all(r.score == 0.1 for r in results)
    assert emoji_provider.search("/emoji") == results


def test_no_match_returns_empty(emoji_provider):
    assert emoji_provider.search("zzzqqq") == []


def test_every_key_routes_to_provider(emoji_provider):
    for r in emoji_provider.search(""):
        assert r.key.split(":", 1)[0] == emoji_provider.id


def test_extras_carry_glyph(emoji_provider):
    joy = emoji_provider.search("joy")[0]
    assert joy.extras["glyph"] == "😂"
    assert ":joy:" in joy.extras["shortcodes"]


def test_preview_returns_card_for_valid_key(emoji_provider):
    preview = emoji_provider.preview("emoji:joy")
    assert preview is not None
    assert preview.preview_kind == "card"
    assert preview.data["glyph"] == "😂"
    assert preview.data["title"] == "Face with Tears of Joy"


def test_preview_is_idempotent(emoji_provider):
    assert emoji_provider.preview("emoji:joy") == emoji_provider.preview("emoji:joy")


@pytest.mark.parametrize("key", ["emoji:nonexistent", "apps:joy", ""])
def test_preview_returns_none_for_unknown_key(emoji_provider, key):
    assert emoji_provider.preview(key) is None


def test_execute_copy_actions():
    copied = []
    provider = EmojiProvider(clipboard=copied.append)
    assert provider.execute("copy_glyph", "emoji:joy") is True
    assert provider.execute("copy_shortcode", "emoji:joy") is True
    assert copied == ["😂", ":joy:"]


def test_execute_without_clipboard_succeeds(emoji_provider):
    assert emoji_provider.execute("copy_glyph", "emoji:joy") is True


def test_execute_fails_for_invalid_action(emoji_provider):
    assert emoji_provider.execute("invalid_action", "emoji:joy") is False


def test_execute_fails_for_invalid_key(emoji_provider):
    assert emoji_provider.execute("copy_glyph", "emoji:nonexistent") is False


def test_clipboard_fault_becomes_false():
    def _broken(text):
        raise ProviderError("clipboard", "no display")

    provider = EmojiProvider(clipboard=_broken)
    assert provider.execute("copy_glyph", "emoji:joy") is False


def test_system_clipboard_copies_through_pyperclip(monkeypatch):
    import pyperclip

    from lancea.providers.clipboard import SystemClipboard

    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    provider = EmojiProvider(clipboard=SystemClipboard())
    assert provider.execute("copy_glyph", "emoji:joy") is True
    assert copied == ["😂"]


def test_missing_clipboard_mechanism_becomes_false(monkeypatch):
    import pyperclip

    from lancea.providers.clipboard import SystemClipboard

    def _no_mechanism(text):
        raise pyperclip.PyperclipException("could not find a copy/paste mechanism")

    monkeypatch.setattr(pyperclip, "copy", _no_mechanism)
    with pytest.raises(ProviderError):
        SystemClipboard()("x")
    assert EmojiProvider(clipboard=SystemClipboard()).execute("copy_shortcode", "emoji:joy") is False


def test_create_clipboard_selects_backend(monkeypatch):
    import pyperclip

    from lancea.errors import ConfigError
    from lancea.providers.clipboard import SystemClipboard, create_clipboard

    chosen = []
    monkeypatch.setattr(pyperclip, "set_clipboard", chosen.append)
    for off in ("", None, "none", "OFF"):
        assert create_clipboard(off) is None
    assert isinstance(create_clipboard("auto"), SystemClipboard)
    assert create_clipboard("Wl-Clipboard").backend == "wl-clipboard"
    assert chosen == ["wl-clipboard"]
    with pytest.raises(ConfigError):
        create_clipboard("wl-copy")
