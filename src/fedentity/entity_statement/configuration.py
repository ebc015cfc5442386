from typing import List
from typing import Optional

from idpyoidc.message import Message

from fedentity.exception import MetadataNotFound
from fedentity.identifier import Identifier
from fedentity.keyset import KeySet
from fedentity.message import ENTITY_TYPE2METADATA_CLASS
from fedentity.message import EntityStatement
from fedentity.message import Metadata


class EntityConfiguration(object):
    """
    An Entity Configuration, that is an Entity Statement issued by an entity about itself.
    https://openid.net/specs/openid-federation-1_0-41.html#section-3
    """

    def __init__(self,
                 issuer: Identifier,
                 subject: Identifier,
                 issued_at: int,
                 expiration: int,
                 jwks: KeySet,
                 authority_hints: Optional[List[Identifier]] = None,
                 metadata: Optional[dict] = None):
        self.issuer = issuer
        self.subject = subject
        self.issued_at = issued_at
        self.expiration = expiration
        self.jwks = jwks
        self.authority_hints = authority_hints or []
        self.metadata = metadata or {}

    def __eq__(self, other):
        if not isinstance(other, EntityConfiguration):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"EntityConfiguration(iss={self.issuer}, sub={self.subject}, exp={self.expiration})"

    def to_message(self) -> EntityStatement:
        _msg = {
            "iss": str(self.issuer),
            "sub": str(self.subject),
            "iat": self.issued_at,
            "exp": self.expiration,
            "jwks": self.jwks.to_dict()
        }
        if self.authority_hints:
            _msg["authority_hints"] = [str(h) for h in self.authority_hints]
        if self.metadata:
            _msg["metadata"] = Metadata(**self.metadata)
        return EntityStatement(**_msg)

    def to_dict(self) -> dict:
        return self.to_message().to_dict()

    def to_json(self) -> str:
        return self.to_message().to_json()

    @classmethod
    def from_message(cls, message: EntityStatement) -> "EntityConfiguration":
        """
        Builds an EntityConfiguration from a verified EntityStatement message.
        """
        _authority_hints = [Identifier(h) for h in message.get("authority_hints", [])]
        _metadata = message.get("metadata")
        if _metadata:
            _metadata = dict(_metadata.items())
        return cls(issuer=Identifier(message["iss"]),
                   subject=Identifier(message["sub"]),
                   issued_at=message["iat"],
                   expiration=message["exp"],
                   jwks=KeySet.from_dict(message["jwks"]),
                   authority_hints=_authority_hints,
                   metadata=_metadata)

    def find_metadata(self, entity_type: str, target_cls: Optional[type] = None):
        """
        Finds the metadata for an entity type.

        :param entity_type: The entity type identifier
        :param target_cls: If given, the metadata is returned as an instance of this class.
            Otherwise the class registered for the entity type is used, if there is one.
        :return: The metadata
        :raises MetadataNotFound: If there is no metadata for the entity type, or what there
            is can not be turned into target_cls
        """
        try:
            _metadata = self.metadata[entity_type]
        except KeyError:
            raise MetadataNotFound(f"could not find metadata for entity type {entity_type}")

        if target_cls is None:
            target_cls = ENTITY_TYPE2METADATA_CLASS.get(entity_type)

        if target_cls is None or isinstance(_metadata, target_cls):
            return _metadata

        if isinstance(_metadata, Message):
            _metadata = _metadata.to_dict()
        elif not isinstance(_metadata, dict):
            raise MetadataNotFound(
                f"metadata for entity type {entity_type} is not a JSON object: {_metadata}")
        return target_cls(**_metadata)


def find_metadata(entity_configuration: EntityConfiguration, entity_type: str,
                  target_cls: Optional[type] = None):
    return entity_configuration.find_metadata(entity_type, target_cls)
