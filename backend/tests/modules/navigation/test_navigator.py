"""Tests for the client navigator, browser history and Link."""

import pytest

from modules.i18n import InMemoryPreferenceStore, Language, LanguagePreference, PREFERENCE_KEY
from modules.navigation import (
    BrowserHistory,
    ClientNavigator,
    Link,
    NavigationKind,
    is_external,
    split_url,
)


@pytest.fixture
def store():
    return InMemoryPreferenceStore()


@pytest.fixture
def navigator(store):
    return ClientNavigator(BrowserHistory("/en/home"), LanguagePreference(store))


@pytest.fixture
def events(navigator):
    received = []
    navigator.on_navigate(received.append)
    return received


class TestSplitUrl:
    @pytest.mark.parametrize(
        "url,pathname,search,fragment",
        [
            ("/en/news?page=2#top", "/en/news", "?page=2", "#top"),
            ("/en/news#a?b", "/en/news", "", "#a?b"),
            ("/en/news?x=1", "/en/news", "?x=1", ""),
            ("?x=1", "/", "?x=1", ""),
            ("", "/", "", ""),
        ],
    )
    def test_parts(self, url, pathname, search, fragment):
        location = split_url(url)
        assert (location.pathname, location.search, location.hash) == (pathname, search, fragment)


class TestBrowserHistory:
    def test_push_discards_forward_entries(self):
        history = BrowserHistory("/a")
        history.push_state("/b")
        history.push_state("/c")
        history.back()
        history.back()
        history.push_state("/d")

        assert [e.pathname for e in history.entries] == ["/a", "/d"]

    def test_back_and_forward_fire_pop_listeners(self):
        history = BrowserHistory("/a")
        history.push_state("/b")
        popped = []
        history.on_pop_state(lambda location: popped.append(location.pathname))

        history.back()
        history.forward()
        history.forward()  # Already at the end

        assert popped == ["/a", "/b"]

    def test_replace_keeps_length(self):
        history = BrowserHistory("/a")
        history.replace_state("/b")
        assert history.length == 1
        assert history.location.pathname == "/b"


class TestNavigate:
    def test_pushes_and_emits(self, navigator, events):
        assert navigator.navigate("/en/news") is True

        assert navigator.location.pathname == "/en/news"
        assert navigator.history.length == 2
        assert [(e.kind, e.location.pathname) for e in events] == [(NavigationKind.PUSH, "/en/news")]

    @pytest.mark.parametrize("url", ["https://t.me/tpc", "mailto:hi@example.com", "tel:+62123"])
    def test_external_targets_do_a_full_load(self, navigator, events, url):
        assert navigator.navigate(url) is False

        assert navigator.history.full_loads == [url]
        assert navigator.history.length == 1
        assert events == []

    def test_back_is_broadcast(self, navigator, events):
        navigator.navigate("/en/news")
        navigator.history.back()

        assert events[-1].kind == NavigationKind.POP
        assert events[-1].location.pathname == "/en/home"

    def test_unsubscribe(self, navigator):
        received = []
        unsubscribe = navigator.on_navigate(received.append)
        unsubscribe()
        unsubscribe()  # Safe to call twice
        navigator.navigate("/en/news")
        assert received == []

    def test_events_delivered_in_emission_order(self, navigator):
        """An emit from inside a listener is delivered after the current event."""
        seen = []

        def first(event):
            seen.append(("first", event.location.pathname))
            if event.location.pathname == "/en/a":
                navigator.navigate("/en/b")

        def second(event):
            seen.append(("second", event.location.pathname))

        navigator.on_navigate(first)
        navigator.on_navigate(second)
        navigator.navigate("/en/a")

        assert seen == [
            ("first", "/en/a"),
            ("second", "/en/a"),
            ("first", "/en/b"),
            ("second", "/en/b"),
        ]

    def test_redirect_replaces_entry(self, navigator, events):
        navigator.navigate("/en/admin")
        navigator.redirect("/en/member/dashboard")

        assert navigator.history.length == 2
        assert navigator.location.pathname == "/en/member/dashboard"
        assert events[-1].kind == NavigationKind.REPLACE


class TestSwitchLanguage:
    def test_switches_and_persists(self, navigator, events, store):
        navigator.navigate("/en/news/abc?x=1")
        events.clear()

        assert navigator.switch_language(Language.ID) is True

        assert navigator.location.pathname == "/id/news/abc"
        assert store.get_item(PREFERENCE_KEY) == "id"
        assert len(events) == 1

    def test_idempotent(self, navigator, events):
        navigator.switch_language(Language.ID, "/en/faq")
        navigator.switch_language(Language.ID, "/id/faq")

        assert len(events) == 1

    def test_same_language_does_not_navigate(self, navigator, events, store):
        assert navigator.switch_language(Language.EN, "/en/home") is False
        assert events == []
        # Still an explicit choice, so it is persisted
        assert store.get_item(PREFERENCE_KEY) == "en"

    def test_explicit_current_path(self, navigator):
        navigator.switch_language(Language.ID, "/en/member/dashboard")
        assert navigator.location.pathname == "/id/member/dashboard"


class TestLink:
    def test_resolves_in_current_language(self, navigator):
        navigator.navigate("/id/home")
        assert Link(navigator, "/news?page=2").resolve() == "/id/news?page=2"

    def test_prefixed_target_kept(self, navigator):
        assert Link(navigator, "/id/faq").resolve() == "/id/faq"

    def test_plain_activation_navigates(self, navigator, events):
        clicked = []
        link = Link(navigator, "/news", on_click=lambda: clicked.append(True))

        assert link.activate() is True
        assert navigator.location.pathname == "/en/news"
        assert len(events) == 1
        assert clicked == [True]

    @pytest.mark.parametrize("modifier", ["meta", "ctrl", "shift", "alt"])
    def test_modified_activation_left_to_browser(self, navigator, events, modifier):
        assert Link(navigator, "/news").activate(**{modifier: True}) is False
        assert events == []

    def test_external_link_left_to_browser(self, navigator, events):
        assert Link(navigator, "https://example.com").activate() is False
        assert events == []

    def test_link_to_current_page_does_not_navigate(self, navigator, events):
        assert Link(navigator, "/home").activate() is True
        assert events == []
        assert navigator.history.length == 1


def test_is_external():
    assert is_external("HTTPS://example.com")
    assert not is_external("/en/home")
