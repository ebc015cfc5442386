import logging
from typing import List
from typing import Optional
from typing import Union

from fedentity.defaults import ACME_REQUESTOR_KEY_DEFS
from fedentity.defaults import FEDERATION_KEY_DEFS
from fedentity.entity_statement.configuration import EntityConfiguration
from fedentity.entity_statement.create import construct_entity_configuration
from fedentity.entity_statement.create import sign_entity_configuration
from fedentity.entity_statement.create import sign_token
from fedentity.exception import NoEnrollmentKey
from fedentity.identifier import Identifier
from fedentity.identifier import parse_url
from fedentity.keyset import generate_private_key_set
from fedentity.keyset import KeySet
from fedentity.server import ServingHandle

logger = logging.getLogger(__name__)


class Entity(object):
    """
    An OpenID Federation Entity.

    The entity owns its keys, they are generated when the entity is created and never change.
    """

    def __init__(self,
                 entity_id: str,
                 is_acme_requestor: Optional[bool] = False,
                 acme_issuer: Optional[str] = None,
                 authority_hints: Optional[List[str]] = None):
        """
        :param entity_id: The entity identifier
        :param is_acme_requestor: If True keys that may be certified are generated and
            acme_requestor metadata is advertised.
        :param acme_issuer: If set, acme_issuer metadata pointing to this ACME directory URL
            is advertised. Must be an https URL.
        :param authority_hints: Identifiers of the entity's immediate superiors
        :raises InvalidURL: If the identifier, a hint or the directory URL is malformed
        """
        self.entity_id = Identifier(entity_id)
        self.authority_hints = [Identifier(h) for h in authority_hints or []]
        # https only, RFC 8555 section 6.1
        self.acme_directory = parse_url(acme_issuer).geturl() if acme_issuer else None

        # https://openid.net/specs/openid-federation-1_0-41.html#section-1.2-3.44
        self.federation_keys = generate_private_key_set(FEDERATION_KEY_DEFS)

        # The keys this entity may request X.509 certificates for
        if is_acme_requestor:
            self.acme_requestor_keys = generate_private_key_set(ACME_REQUESTOR_KEY_DEFS)
        else:
            self.acme_requestor_keys = KeySet()

        logger.info(f"Created entity {self.entity_id}")

    @classmethod
    def from_config(cls, config) -> "Entity":
        """
        :param config: A :py:class:`fedentity.configure.FedEntityConfiguration` instance or
            a dictionary with the same content
        """
        return cls(entity_id=config.get("entity_id"),
                   is_acme_requestor=config.get("acme_requestor", False),
                   acme_issuer=config.get("acme_issuer"),
                   authority_hints=config.get("authority_hints"))

    def entity_configuration(self) -> EntityConfiguration:
        return construct_entity_configuration(self)

    def current_configuration(self) -> str:
        """
        Constructs and signs an Entity Configuration for this entity.

        :return: A compact serialized JWS
        """
        return sign_entity_configuration(self.entity_configuration(), self.federation_keys[0])

    def sign_token(self, token: Union[str, bytes]) -> str:
        """
        Constructs a JWS containing a signature over the token using the first of the
        entity's acme_requestor keys.
        """
        if not self.acme_requestor_keys:
            raise NoEnrollmentKey(f"entity {self.entity_id} has no acme_requestor keys")

        return sign_token(token, self.acme_requestor_keys[0])

    def serve(self, host: Optional[str] = "0.0.0.0", port: Optional[int] = None):
        """
        Starts serving the federation endpoints in a background thread.

        :param host: The address to bind to
        :param port: The port to listen on, by default the port in the entity identifier
        :return: A :py:class:`fedentity.server.ServingHandle` instance
        """
        if port is None:
            port = self.entity_id.port
        return ServingHandle(self, host=host, port=port)
