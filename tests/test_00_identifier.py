import pytest

from fedentity.exception import InvalidIdentifier
from fedentity.exception import InvalidURL
from fedentity.identifier import Identifier
from fedentity.identifier import parse_url


@pytest.mark.parametrize("entity_id", [
    "https://issuer.example",
    "https://issuer.example:8443",
    "https://issuer.example/",
    "https://example.org/tenant1",
    "https://127.0.0.1:8080/path/to/entity",
    "https://[::1]:8443",
    "https://xn--bcher-kva.example",
    "https://b\u00fccher.example",
])
def test_valid(entity_id):
    _id = Identifier(entity_id)
    assert str(_id) == entity_id
    # round trip
    assert Identifier(str(_id)) == _id


@pytest.mark.parametrize("entity_id", [
    "http://issuer.example",
    "ftp://issuer.example",
    "issuer.example",
    "https://issuer.example#frag",
    "https://issuer.example/path#frag",
    "https://issuer.example?foo=bar",
    "https://issuer.example/?foo",
    "https://issuer.example:99999",
    "https://issuer.example:port",
    "https://",
    "",
    "https://exa mple.com",
    "https://ex\nample.com",
    "https://ex\tample.com",
    " https://issuer.example",
    "https://issuer.example/pa th",
    "https://a<b>.com",
    "https://issuer.example/\"quoted\"",
    "https://exa_mple.com",
    "https://-issuer.example",
    "https://issuer..example",
    "https://issuer%2Eexample",
])
def test_invalid(entity_id):
    with pytest.raises(InvalidIdentifier):
        Identifier(entity_id)


def test_not_a_string():
    with pytest.raises(InvalidIdentifier):
        Identifier(None)


def test_parse():
    assert Identifier.parse("https://issuer.example") == Identifier("https://issuer.example")


def test_equality():
    a = Identifier("https://issuer.example:8443")
    b = Identifier("https://issuer.example:8443")
    c = Identifier("https://issuer.example")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a != "https://issuer.example:8443"
    assert a is not None and a != None  # noqa: E711
    assert len({a, b, c}) == 2


def test_immutable():
    _id = Identifier("https://issuer.example")
    with pytest.raises(AttributeError):
        _id._url = "https://other.example"


def test_port():
    assert Identifier("https://issuer.example:8443").port == 8443
    assert Identifier("https://issuer.example").port == 443
    assert Identifier("https://issuer.example").host == "issuer.example"


def test_well_known_url():
    _id = Identifier("https://example.org/tenant1")
    assert _id.well_known_url() == "https://example.org/.well-known/openid-federation"
    assert _id.well_known_url(
        tenant=True) == "https://example.org/tenant1/.well-known/openid-federation"

    _id = Identifier("https://issuer.example:8443")
    assert _id.well_known_url() == "https://issuer.example:8443/.well-known/openid-federation"


def test_canonical_form():
    # An empty query or fragment marker is not part of the canonical form
    assert str(Identifier("https://issuer.example?")) == "https://issuer.example"
    assert Identifier("https://issuer.example#") == Identifier("https://issuer.example")


@pytest.mark.parametrize("url", [
    "https://acme.example/directory",
    "https://acme.example/directory?tenant=a",
])
def test_parse_url(url):
    assert parse_url(url).geturl() == url


@pytest.mark.parametrize("url", [
    "http://acme.example/directory",
    "https://acme.example/directory#x",
    "https://acme example/directory",
    "directory",
    None,
])
def test_parse_url_invalid(url):
    with pytest.raises(InvalidURL):
        parse_url(url)
