import logging
from enum import Enum
from typing import Iterable
from typing import List
from typing import Optional

from cryptojwt.exception import JWKESTException
from cryptojwt.jwk.ec import new_ec_key
from cryptojwt.jwk.jwk import key_from_jwk_dict
from cryptojwt.jwk.rsa import new_rsa_key
from cryptojwt.utils import b64e

from fedentity.defaults import RSA_KEY_SIZE
from fedentity.exception import KeyGenerationError
from fedentity.exception import UnsupportedKeyType

logger = logging.getLogger(__name__)


class KeyKind(Enum):
    """The kinds of keys an entity can generate and the signing algorithm that goes with each."""
    RSA_2048 = ("RSA", "", "RS256")
    EC_P256 = ("EC", "P-256", "ES256")
    EC_P384 = ("EC", "P-384", "ES384")

    def __init__(self, kty, crv, alg):
        self.kty = kty
        self.crv = crv
        self.alg = alg

    @classmethod
    def from_key_def(cls, key_def: dict) -> "KeyKind":
        """
        Maps a key definition like {"type": "EC", "crv": "P-256", "use": ["sig"]} onto a kind.

        :raises UnsupportedKeyType: if the definition describes a key outside the supported set.
        """
        _type = key_def.get("type", "").upper()
        if _type == "RSA":
            _size = key_def.get("size", RSA_KEY_SIZE)
            if _size != RSA_KEY_SIZE:
                raise UnsupportedKeyType(f"Unsupported RSA key size: {_size}")
            return cls.RSA_2048
        elif _type == "EC":
            _crv = key_def.get("crv", "P-256")
            for kind in cls:
                if kind.kty == "EC" and kind.crv == _crv:
                    return kind
            raise UnsupportedKeyType(f"Unsupported elliptic curve: {_crv}")

        raise UnsupportedKeyType(f"Unsupported key type: {key_def.get('type')}")


def thumbprint_kid(key) -> str:
    """base64url encoded SHA-256 thumbprint (RFC 7638) of the public part of the key."""
    return b64e(key.thumbprint("SHA-256")).decode("utf8")


def new_key(kind: KeyKind):
    if kind.kty == "RSA":
        key = new_rsa_key(key_size=RSA_KEY_SIZE)
    else:
        key = new_ec_key(crv=kind.crv)

    key.use = "sig"
    key.alg = kind.alg
    key.kid = thumbprint_kid(key)
    return key


class KeySet(object):
    """
    An ordered, immutable collection of keys.
    """

    def __init__(self, keys: Optional[Iterable] = None):
        self._keys = tuple(keys or ())

    def __iter__(self):
        return iter(self._keys)

    def __len__(self):
        return len(self._keys)

    def __getitem__(self, index):
        return self._keys[index]

    def __bool__(self):
        return len(self._keys) > 0

    def __eq__(self, other):
        if not isinstance(other, KeySet):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"KeySet({self.kids()})"

    def kids(self) -> List[str]:
        return [k.kid for k in self._keys]

    def by_kid(self, kid: str) -> list:
        """All the keys carrying the given key ID."""
        return [k for k in self._keys if k.kid == kid]

    def public_view(self) -> "KeySet":
        """
        A new key set holding only the public parts of the keys. Key ID and algorithm are kept.
        """
        return KeySet([key_from_jwk_dict(k.serialize(private=False)) for k in self._keys])

    def to_dict(self, private: Optional[bool] = False) -> dict:
        return {"keys": [k.serialize(private=private) for k in self._keys]}

    @classmethod
    def from_dict(cls, jwks: dict) -> "KeySet":
        return cls([key_from_jwk_dict(_jwk) for _jwk in jwks["keys"]])


def generate_private_key_set(key_defs: List[dict]) -> KeySet:
    """
    Generates one key per key definition, in order.

    :param key_defs: List of key definitions
    :return: A KeySet instance with private keys
    :raises KeyGenerationError: If any of the keys could not be created. Nothing is returned then.
    """
    kinds = [KeyKind.from_key_def(_def) for _def in key_defs]

    keys = []
    for kind in kinds:
        try:
            _key = new_key(kind)
        except (ValueError, TypeError, OSError, JWKESTException) as err:
            raise KeyGenerationError(f"failed to generate {kind.name} key: {err}") from err
        logger.debug(f"Generated {kind.name} key with kid {_key.kid}")
        keys.append(_key)

    return KeySet(keys)


def public_view(key_set: KeySet) -> KeySet:
    return key_set.public_view()
