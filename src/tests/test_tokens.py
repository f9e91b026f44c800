from __future__ import annotations

import re

from src.formatting.tokens import (
    ALIAS_PREFIXES,
    TokenStore,
    overlaps,
    rewrite_matches,
    wrap_existing_tokens,
    wrap_matches,
)


def test_register_generates_sequential_unique_aliases() -> None:
    store = TokenStore.for_text("hello")

    first = store.register("link", "<a>one</a>", "one")
    second = store.register("mention", "<a>two</a>", "two")

    assert first.startswith(ALIAS_PREFIXES["link"] + "0")
    assert second.startswith(ALIAS_PREFIXES["mention"] + "1")
    assert first != second
    assert len(store) == 2
    assert store.get(first).original_text == "one"


def test_alias_is_letters_and_digits_only() -> None:
    store = TokenStore.for_text("text")
    alias = store.register("hashtag", "<a>#x</a>", "#x")

    assert re.fullmatch(r"[A-Za-z0-9]+", alias)


def test_nonce_never_occurs_in_input() -> None:
    text = "MMLINK0 MMATMENTION1 mmhashtag2 " + "abcdefgh" * 3
    for _ in range(20):
        store = TokenStore.for_text(text)
        alias = store.register("link", "<a></a>", "x")
        assert store.nonce not in text.lower()
        assert alias not in text


def test_short_alias_is_not_prefix_of_longer_alias() -> None:
    store = TokenStore(nonce="qwertyui")
    aliases = [store.register("link", str(idx), str(idx)) for idx in range(12)]

    assert aliases[1] not in aliases[10]
    assert aliases[1] not in aliases[11]


def test_resolve_expands_nested_aliases_newest_first() -> None:
    store = TokenStore.for_text("see #general")
    inner = store.register("hashtag", "<a>#general</a>", "#general")
    outer = store.register("self_mention", f"<span>{inner}</span>", "#general")

    assert store.resolve(f"see {outer}") == "see <span><a>#general</a></span>"


def test_resolve_ignores_superseded_aliases_and_leaves_store_intact() -> None:
    store = TokenStore.for_text("plain")
    alias = store.register("link", "<a>x</a>", "x")

    assert store.resolve("plain") == "plain"
    assert alias in store
    assert len(store) == 1


def test_find_returns_snapshot_in_registration_order() -> None:
    store = TokenStore.for_text("")
    store.register("link", "a", "#one")
    store.register("mention", "b", "@two")
    store.register("hashtag", "c", "#three")

    found = store.find(lambda token: token.original_text.startswith("#"))

    assert [token.original_text for _, token in found] == ["#one", "#three"]


def test_rewrite_matches_keeps_rejected_spans() -> None:
    pattern = re.compile(r"\d+")

    result = rewrite_matches(pattern, "a1 b22 c333", lambda m: None if m.group(0) == "22" else "N")

    assert result == "aN b22 cN"


def test_wrap_existing_tokens_skips_tokens_no_longer_in_text() -> None:
    store = TokenStore.for_text("")
    live = store.register("link", "<a>x</a>", "x")
    store.register("link", "<a>x</a>", "x")

    output = wrap_existing_tokens(
        f"see {live}",
        store,
        "search_term",
        lambda token: token.original_text == "x",
        lambda alias, token: f"<span>{alias}</span>",
    )

    assert len(store) == 3
    assert live not in output
    assert store.resolve(output) == "see <span><a>x</a></span>"


def test_wrap_matches_preserves_boundary() -> None:
    store = TokenStore.for_text("")
    pattern = re.compile(r"(^|\s)(hi)\b")

    output = wrap_matches(pattern, "hi there, hi", store, "search_term", lambda word: f"[{word}]")

    assert store.resolve(output) == "[hi] there, [hi]"
    assert output.count(" ") == 2


def test_protected_spans_cover_live_aliases() -> None:
    store = TokenStore.for_text("")
    alias = store.register("link", "<a>x</a>", "x")
    text = f"see #{alias} now"

    assert store.protected_spans(text) == [(5, 5 + len(alias))]


def test_protected_spans_include_markdown_link_tails_when_shielding() -> None:
    text = "[a](http://x.com/#frag) #tag"

    assert TokenStore.for_text(text).protected_spans(text) == []
    assert TokenStore.for_text(text, shield_markdown_links=True).protected_spans(text) == [(2, 23)]


def test_wrap_matches_skips_words_overlapping_aliases() -> None:
    store = TokenStore.for_text("")
    alias = store.register("link", "<a>example.com</a>", "example.com")
    pattern = re.compile(r"(^|\W)(#[a-zA-Z0-9.\-_]+)\b")

    output = wrap_matches(pattern, f"#{alias} #real", store, "hashtag", lambda word: f"[{word}]")

    assert output.startswith(f"#{alias} ")
    assert store.resolve(output) == "#<a>example.com</a> [#real]"


def test_overlaps_treats_spans_as_half_open() -> None:
    spans = [(4, 10)]

    assert overlaps(spans, 0, 5)
    assert overlaps(spans, 9, 12)
    assert not overlaps(spans, 0, 4)
    assert not overlaps(spans, 10, 12)
    assert not overlaps([], 0, 100)
