""" Classes used to describe the information in an OpenID Federation Entity Configuration."""
from idpyoidc.exception import MissingRequiredAttribute
from idpyoidc.message import Message
from idpyoidc.message import msg_ser
from idpyoidc.message import OPTIONAL_LIST_OF_STRINGS
from idpyoidc.message import SINGLE_OPTIONAL_STRING
from idpyoidc.message import SINGLE_REQUIRED_INT
from idpyoidc.message import SINGLE_REQUIRED_STRING
from idpyoidc.message.oidc import deserialize_from_one_of
from idpyoidc.message.oidc import dict_deser
from idpyoidc.message.oidc import msg_ser_json

from fedentity.defaults import ACME_ISSUER
from fedentity.defaults import ACME_REQUESTOR
from fedentity.defaults import FEDERATION_ENTITY
from fedentity.identifier import Identifier
from fedentity.identifier import parse_url

SINGLE_REQUIRED_DICT = (dict, True, msg_ser_json, dict_deser, False)

PRIVATE_KEY_MEMBERS = ["d", "p", "q", "dp", "dq", "qi", "oth", "k"]


def jwks_keys(jwks, where: str) -> list:
    """The list of JWKs in a JWKS received from someone else."""
    if not isinstance(jwks, dict):
        raise ValueError(f"{where} jwks is not a JSON object")
    _keys = jwks.get("keys")
    if not isinstance(_keys, list):
        raise MissingRequiredAttribute(f"keys in {where} jwks")
    if not all(isinstance(_jwk, dict) for _jwk in _keys):
        raise ValueError(f"{where} jwks keys must be JSON objects")
    return _keys


class FederationEntityMetadata(Message):
    """Metadata for an OpenID Federation Entity."""
    c_param = {
        "federation_fetch_endpoint": SINGLE_OPTIONAL_STRING,
        "federation_list_endpoint": SINGLE_OPTIONAL_STRING,
        "federation_resolve_endpoint": SINGLE_OPTIONAL_STRING,
        "organization_name": SINGLE_OPTIONAL_STRING,
        "homepage_uri": SINGLE_OPTIONAL_STRING,
        "contacts": OPTIONAL_LIST_OF_STRINGS,
    }


def federation_entity_deser(val, sformat="json"):
    """Deserializes a JSON object (most likely) into a FederationEntityMetadata."""
    return deserialize_from_one_of(val, FederationEntityMetadata, sformat)


OPTIONAL_FEDERATION_ENTITY_METADATA = (Message, False, msg_ser, federation_entity_deser, False)


class ACMERequestorMetadata(Message):
    """
    The keys an entity may request X.509 certificates for.
    https://peppelinux.github.io/draft-demarco-acme-openid-federation/draft-demarco-acme-openid-federation.html#section-6.4.2
    """
    c_param = {
        "jwks": SINGLE_REQUIRED_DICT
    }

    def verify(self, **kwargs):
        super(ACMERequestorMetadata, self).verify(**kwargs)

        # Only public keys may ever be published
        for _jwk in jwks_keys(self["jwks"], ACME_REQUESTOR):
            _private = set(PRIVATE_KEY_MEMBERS).intersection(_jwk.keys())
            if _private:
                raise ValueError(f"Private key members in acme_requestor jwks: {_private}")


def acme_requestor_deser(val, sformat="json"):
    """Deserializes a JSON object (most likely) into an ACMERequestorMetadata."""
    return deserialize_from_one_of(val, ACMERequestorMetadata, sformat)


OPTIONAL_ACME_REQUESTOR_METADATA = (Message, False, msg_ser, acme_requestor_deser, False)


class ACMEIssuerMetadata(Message):
    """
    Where the ACME directory of an issuer can be found.
    https://peppelinux.github.io/draft-demarco-acme-openid-federation/draft-demarco-acme-openid-federation.html#section-6.4.1
    """
    c_param = {
        "directory": SINGLE_REQUIRED_STRING
    }

    def verify(self, **kwargs):
        super(ACMEIssuerMetadata, self).verify(**kwargs)
        parse_url(self["directory"])


def acme_issuer_deser(val, sformat="json"):
    """Deserializes a JSON object (most likely) into an ACMEIssuerMetadata."""
    return deserialize_from_one_of(val, ACMEIssuerMetadata, sformat)


OPTIONAL_ACME_ISSUER_METADATA = (Message, False, msg_ser, acme_issuer_deser, False)

ENTITY_TYPE2METADATA_CLASS = {
    FEDERATION_ENTITY: FederationEntityMetadata,
    ACME_REQUESTOR: ACMERequestorMetadata,
    ACME_ISSUER: ACMEIssuerMetadata
}


class Metadata(Message):
    """
    The metadata of an entity, keyed by entity type. Known entity types are deserialized
    directly into their metadata class, others are kept as they are.
    """
    c_param = {
        FEDERATION_ENTITY: OPTIONAL_FEDERATION_ENTITY_METADATA,
        ACME_REQUESTOR: OPTIONAL_ACME_REQUESTOR_METADATA,
        ACME_ISSUER: OPTIONAL_ACME_ISSUER_METADATA
    }

    def verify(self, **kwargs):
        super(Metadata, self).verify(**kwargs)
        for entity_type, item in self.items():
            if isinstance(item, Message):
                item.verify(**kwargs)
            elif entity_type in ENTITY_TYPE2METADATA_CLASS:
                raise ValueError(f"{entity_type} metadata is not a JSON object")


def metadata_deser(val, sformat="json"):
    """Deserializes a JSON object (most likely) into a Metadata."""
    return deserialize_from_one_of(val, Metadata, sformat)


SINGLE_OPTIONAL_METADATA = (Message, False, msg_ser, metadata_deser, False)


class EntityStatement(Message):
    """The Entity Statement"""
    c_param = {
        "iss": SINGLE_REQUIRED_STRING,
        "sub": SINGLE_REQUIRED_STRING,
        "iat": SINGLE_REQUIRED_INT,
        "exp": SINGLE_REQUIRED_INT,
        "jwks": SINGLE_REQUIRED_DICT,
        "authority_hints": OPTIONAL_LIST_OF_STRINGS,
        "metadata": SINGLE_OPTIONAL_METADATA
    }

    def verify(self, **kwargs):
        super(EntityStatement, self).verify(**kwargs)

        # Entity identifiers are validated again, whatever the sender claims
        for claim in ["iss", "sub"]:
            Identifier(self[claim])
        for hint in self.get("authority_hints", []):
            Identifier(hint)

        jwks_keys(self["jwks"], "entity statement")

        _metadata = self.get("metadata")
        if _metadata is not None and not isinstance(_metadata, Metadata):
            raise ValueError("metadata is not a JSON object")
        if _metadata:
            _metadata.verify(**kwargs)
