"""Tests for configuration resolution (corsroute/services/resolver.py)."""

import re

import pytest

from corsroute.core.errors import ConfigurationError
from corsroute.models.policy import AnyOrigin, CORSOptions, ExactOrigins, PredicateOrigins
from corsroute.services.resolver import resolve


def test_declared_fields_override_defaults(defaults):
    """Declared options win; unset options are inherited."""
    policy = resolve({"origins": "*", "max_age": 60}, defaults)

    assert isinstance(policy.origin_policy, AnyOrigin)
    assert policy.max_age == 60
    assert policy.allow_credentials is True


def test_empty_declaration_inherits_everything(defaults):
    """No declared options means the defaults apply unchanged."""
    policy = resolve({}, defaults)

    assert policy.origin_policy == ExactOrigins(origins=frozenset({"http://foo.com", "http://bar.com"}))
    assert policy.allow_credentials is True
    assert policy.max_age == 600
    assert policy.allowed_methods == ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE")


def test_explicit_none_unsets_default(defaults):
    """An explicitly declared None overrides a default max_age."""
    assert resolve({"max_age": None}, defaults).max_age is None


def test_builtin_defaults():
    """Without defaults, built-in values apply."""
    policy = resolve({})

    assert isinstance(policy.origin_policy, AnyOrigin)
    assert policy.allow_credentials is False
    assert policy.allowed_headers == ()
    assert policy.exposed_headers == ()
    assert policy.max_age is None
    assert policy.allow_private_network is False


def test_methods_are_uppercased():
    """Declared methods are normalized to uppercase."""
    policy = resolve({"allow_methods": ["get", " post "]})
    assert policy.allowed_methods == ("GET", "POST")


def test_wildcards_for_methods_and_headers():
    """'*' is kept as a wildcard."""
    policy = resolve({"allow_methods": "*", "allow_headers": "*"})

    assert policy.allowed_methods == "*"
    assert policy.allowed_headers == "*"


def test_header_lists_keep_declared_order_and_casing():
    """Header names keep their declared form."""
    policy = resolve({"allow_headers": ["X-Token", "Content-Type"], "expose_headers": ["X-Total"]})

    assert policy.allowed_headers == ("X-Token", "Content-Type")
    assert policy.exposed_headers == ("X-Total",)


def test_single_origin_string():
    """A single origin string becomes an exact set."""
    policy = resolve({"origins": "http://foo.com"})
    assert policy.origin_policy == ExactOrigins(origins=frozenset({"http://foo.com"}))


def test_regex_origins():
    """A compiled regex becomes a predicate policy."""
    pattern = re.compile(r"https://.*\.example\.com")
    policy = resolve({"origins": pattern})

    assert isinstance(policy.origin_policy, PredicateOrigins)
    assert policy.origin_policy.pattern is pattern


def test_callable_origins():
    """A callable becomes a predicate policy."""

    def allow(origin: str) -> bool:
        return True

    policy = resolve({"origins": allow})

    assert isinstance(policy.origin_policy, PredicateOrigins)
    assert policy.origin_policy.predicate is allow


def test_accepts_options_model(defaults):
    """A CORSOptions instance only overrides its explicitly set fields."""
    policy = resolve(CORSOptions(allow_credentials=False), defaults)

    assert policy.allow_credentials is False
    assert policy.max_age == 600


@pytest.mark.parametrize(
    "options",
    [
        {"origin": "*"},
        {"allow_credential": True},
        {"log": True},
    ],
)
def test_unknown_option_is_configuration_error(options):
    """Unrecognized keys fail fast."""
    with pytest.raises(ConfigurationError) as exc_info:
        resolve(options)

    assert exc_info.value.code == "CONFIGURATION_ERROR"
    assert "errors" in exc_info.value.context


@pytest.mark.parametrize(
    "options",
    [
        {"origins": ["foo.com"]},
        {"origins": ["http://foo.com/path"]},
        {"origins": ["*", "http://foo.com"]},
        {"origins": 42},
        {"allow_methods": "GET"},
        {"allow_methods": [""]},
        {"allow_headers": ["X Token"]},
        {"max_age": -1},
    ],
)
def test_malformed_values_are_configuration_errors(options):
    """Malformed values fail fast."""
    with pytest.raises(ConfigurationError):
        resolve(options)


def test_resolution_is_deterministic(defaults):
    """Resolving the same options twice gives equal policies."""
    options = {"origins": ["http://a.com"], "expose_headers": ["X-A", "X-B"]}
    assert resolve(options, defaults) == resolve(options, defaults)
