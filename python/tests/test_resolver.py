"""Tests for remote name resolution."""

import pytest

from mfgraph.capabilities import AppCapability, classify_applications
from mfgraph.models import ApplicationConfig, ExposeRef, RemoteRef
from mfgraph.resolver import (
    RemoteResolver,
    case_insensitive_match,
    exact_match,
    substring_match,
)


def capabilities_for(*names):
    return classify_applications({"/work": [ApplicationConfig(name=n, root_path="/work") for n in names]})


class TestMatchers:

    def test_exact(self):
        assert exact_match("cart", "cart")
        assert not exact_match("Cart", "cart")

    def test_case_insensitive(self):
        assert case_insensitive_match("Cart", "cART")
        assert not case_insensitive_match("cart", "carts")

    def test_substring_either_direction(self):
        assert substring_match("cart", "cart-app")
        assert substring_match("CartApp", "cart")
        assert not substring_match("cart", "checkout")


class TestRemoteResolver:

    def test_default_is_fuzzy(self):
        resolver = RemoteResolver()
        caps = capabilities_for("shell", "cart-app")
        assert resolver.resolve("cart", caps) == list(caps)[1]

    def test_first_match_in_order(self):
        caps = capabilities_for("cart-a", "cart-b")
        assert RemoteResolver().resolve("cart", caps) == list(caps)[0]

    def test_looser_matchers_only_after_stricter_fail(self):
        caps = capabilities_for("cart-app", "CART")
        assert RemoteResolver().resolve("cart", caps) == list(caps)[1]

    def test_unresolved(self):
        caps = capabilities_for("shell")
        assert RemoteResolver().resolve("payments", caps) is None

    def test_consumer_skipped(self):
        caps = capabilities_for("checkout", "shell")
        checkout_id = list(caps)[0]
        assert RemoteResolver().resolve("checkout-api", caps) == checkout_id
        assert RemoteResolver().resolve("checkout-api", caps, consumer_id=checkout_id) is None

    def test_blank_name(self):
        caps = capabilities_for("shell")
        assert RemoteResolver().resolve("", caps) is None
        assert RemoteResolver().resolve("   ", caps) is None

    def test_strict_strategy(self):
        caps = capabilities_for("Cart")
        resolver = RemoteResolver.from_strategy("strict")
        assert resolver.resolve("cart", caps) is None
        assert resolver.resolve("Cart", caps) == list(caps)[0]

    def test_case_insensitive_strategy(self):
        caps = capabilities_for("Cart", "cart-app")
        resolver = RemoteResolver.from_strategy("case-insensitive")
        assert resolver.resolve("CART", caps) == list(caps)[0]
        assert resolver.resolve("app", caps) is None

    def test_custom_matchers(self):
        def prefix_match(remote_name, app_name):
            return app_name.startswith(remote_name)

        caps = capabilities_for("shell", "cart-app")
        assert RemoteResolver([prefix_match]).resolve("cart", caps) == list(caps)[1]

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown resolver strategy"):
            RemoteResolver.from_strategy("magic")


class TestClassification:

    def test_kinds(self):
        caps = classify_applications({"/work": [
            ApplicationConfig(name="both", remotes=[RemoteRef(name="x")], exposes=[ExposeRef(name="A")]),
            ApplicationConfig(name="consumer", remotes=[RemoteRef(name="x")]),
            ApplicationConfig(name="provider", exposes=[ExposeRef(name="A")]),
            ApplicationConfig(name="alone"),
        ]})
        assert [c.kind for c in caps.values()] == ["bidirectional", "consumer", "provider", "standalone"]

    def test_group(self):
        provider = AppCapability(has_remotes=False, has_exposes=True, config=ApplicationConfig(name="p"))
        alone = AppCapability(has_remotes=False, has_exposes=False, config=ApplicationConfig(name="s"))

        assert provider.group(consumed_as_remote=True) == "bidirectional"
        assert provider.group(consumed_as_remote=False) == "hosts"
        assert alone.group(consumed_as_remote=True) == "hosts"

    def test_skips_blank_names(self):
        caps = classify_applications({"/work": [ApplicationConfig(name=""), ApplicationConfig(name=" \t")]})
        assert caps == {}
