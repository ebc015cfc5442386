import ipaddress
import re
from typing import Optional
from urllib.parse import ParseResult
from urllib.parse import urlparse

from fedentity.defaults import ENTITY_CONFIGURATION_PATH
from fedentity.exception import InvalidIdentifier
from fedentity.exception import InvalidURL

# Whitespace, control characters and the characters RFC 3986 never allows unescaped
DISALLOWED_URL_CHARACTERS = re.compile(r'[\x00-\x20\x7f<>"{}|\\^`]')

HOST_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$", re.IGNORECASE)


def valid_hostname(hostname: str) -> bool:
    """A DNS name (IDNA encoded if need be) or an IP address literal."""
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass

    try:
        _ascii = hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return False

    if len(_ascii) > 253:
        return False
    return all(HOST_LABEL.match(label) for label in _ascii.rstrip(".").split("."))


def parse_url(url: str, schemes: Optional[tuple] = ("https",)) -> ParseResult:
    """
    Parses an absolute URL with a host and no fragment.

    :param url: The URL
    :param schemes: Acceptable schemes
    :return: A :py:class:`urllib.parse.ParseResult` instance
    :raises InvalidURL: If the URL is malformed or not acceptable
    """
    if not isinstance(url, str):
        raise InvalidURL("not a string")

    # urlparse silently strips some of these, so they are rejected before parsing
    if DISALLOWED_URL_CHARACTERS.search(url):
        raise InvalidURL("contains whitespace, control or disallowed characters")

    try:
        _parsed = urlparse(url)
        # Accessing the port validates it
        _parsed.port
    except ValueError as err:
        raise InvalidURL(str(err)) from err

    if _parsed.scheme not in schemes:
        raise InvalidURL(f"scheme must be one of {list(schemes)}")

    if not _parsed.hostname:
        raise InvalidURL("missing host")

    if not valid_hostname(_parsed.hostname):
        raise InvalidURL(f"malformed host '{_parsed.hostname}'")

    if _parsed.fragment:
        raise InvalidURL("has fragment")

    return _parsed


class Identifier(object):
    """
    Identifies an entity in an OpenID Federation.
    https://openid.net/specs/openid-federation-1_0-41.html#section-1.2-3.4

    An entity identifier is an https URL with neither a query nor a fragment component.
    Instances are immutable, two identifiers are equal if their canonical string forms are.
    The canonical form is the input, except that an empty query or fragment marker
    (a trailing '?' or '#') is dropped.
    """
    __slots__ = ("_url", "_parsed")

    def __init__(self, identifier: str):
        try:
            _parsed = parse_url(identifier)
        except InvalidURL as err:
            raise InvalidIdentifier(
                f"identifier '{identifier}' is not a valid OIDF entity identifier: {err}") from err

        if _parsed.query:
            raise InvalidIdentifier(
                f"identifier '{identifier}' is not a valid OIDF entity identifier: has query")

        object.__setattr__(self, "_parsed", _parsed)
        object.__setattr__(self, "_url", _parsed.geturl())

    @classmethod
    def parse(cls, identifier: str) -> "Identifier":
        return cls(identifier)

    def __setattr__(self, key, value):
        raise AttributeError("Identifier instances are immutable")

    def __eq__(self, other):
        if not isinstance(other, Identifier):
            return False
        return self._url == other._url

    def __hash__(self):
        return hash(self._url)

    def __str__(self):
        return self._url

    def __repr__(self):
        return f"Identifier('{self._url}')"

    @property
    def host(self) -> str:
        return self._parsed.hostname

    @property
    def port(self) -> int:
        _port = self._parsed.port
        if _port is None:
            return 443
        return _port

    def well_known_url(self, tenant: Optional[bool] = False) -> str:
        """
        The URL where the entity publishes its entity configuration.

        :param tenant: If True the well-known path is appended to the identifier's path,
            otherwise it's placed directly below the host.
        """
        if tenant:
            return f"{self._parsed.scheme}://{self._parsed.netloc}" \
                   f"{self._parsed.path.rstrip('/')}{ENTITY_CONFIGURATION_PATH}"
        return f"{self._parsed.scheme}://{self._parsed.netloc}{ENTITY_CONFIGURATION_PATH}"
