import logging
from typing import Optional

from cryptojwt.jws.jws import JWS
from cryptojwt.jwt import utc_time_sans_frac

from fedentity.defaults import ACME_ISSUER
from fedentity.defaults import ACME_REQUESTOR
from fedentity.defaults import ENTITY_CONFIGURATION_LIFETIME
from fedentity.defaults import ENTITY_STATEMENT_TYPE
from fedentity.defaults import FEDERATION_ENDPOINTS
from fedentity.defaults import FEDERATION_ENTITY
from fedentity.entity_statement.configuration import EntityConfiguration
from fedentity.message import ACMEIssuerMetadata
from fedentity.message import ACMERequestorMetadata
from fedentity.message import FederationEntityMetadata

logger = logging.getLogger(__name__)


def federation_entity_metadata() -> FederationEntityMetadata:
    _args = {}
    for endpoint in FEDERATION_ENDPOINTS.values():
        if "metadata_parameter" in endpoint:
            _args[endpoint["metadata_parameter"]] = endpoint["path"]
    return FederationEntityMetadata(**_args)


def construct_entity_configuration(entity,
                                   lifetime: Optional[int] = ENTITY_CONFIGURATION_LIFETIME
                                   ) -> EntityConfiguration:
    """
    Builds a fresh, unsigned, Entity Configuration for an entity.

    :param entity: A :py:class:`fedentity.entity.Entity` instance
    :param lifetime: The number of seconds the configuration is valid
    :return: A :py:class:`fedentity.entity_statement.configuration.EntityConfiguration` instance
    """
    metadata = {FEDERATION_ENTITY: federation_entity_metadata()}

    if entity.acme_requestor_keys:
        # Only the public parts of the keys that can be certified are published
        metadata[ACME_REQUESTOR] = ACMERequestorMetadata(
            jwks=entity.acme_requestor_keys.public_view().to_dict())

    if entity.acme_directory:
        metadata[ACME_ISSUER] = ACMEIssuerMetadata(directory=entity.acme_directory)

    iat = utc_time_sans_frac()
    logger.debug(f"Entity configuration for {entity.entity_id} with metadata for "
                 f"{list(metadata.keys())}")
    return EntityConfiguration(issuer=entity.entity_id,
                               subject=entity.entity_id,
                               issued_at=iat,
                               expiration=iat + lifetime,
                               jwks=entity.federation_keys.public_view(),
                               authority_hints=entity.authority_hints,
                               metadata=metadata)


def sign_entity_configuration(entity_configuration: EntityConfiguration, key) -> str:
    """
    Signs an Entity Configuration.

    :param entity_configuration: The configuration to sign
    :param key: The signing key. Must have both kid and alg set.
    :return: A compact serialized JWS
    """
    # Keys produced by fedentity.keyset always carry both
    assert key.kid, "federation entity key kid should be set"
    assert key.alg, "federation entity key alg should be set"

    _jws = JWS(entity_configuration.to_json(), alg=key.alg, typ=ENTITY_STATEMENT_TYPE, kid=key.kid)
    return _jws.sign_compact([key])


def sign_token(token, key) -> str:
    """
    Signs an arbitrary token.

    :param token: The token as bytes or string
    :param key: The signing key
    :return: A compact serialized JWS
    """
    assert key.kid, "signing key kid should be set"
    assert key.alg, "signing key alg should be set"

    _jws = JWS(token, alg=key.alg, kid=key.kid)
    return _jws.sign_compact([key])
