import json
import logging
from typing import List
from typing import Optional

from cryptojwt import as_unicode
from cryptojwt.exception import JWKESTException
from cryptojwt.exception import KeyIOError
from cryptojwt.jws.jws import factory
from idpyoidc.exception import MessageException

from fedentity.defaults import ENTITY_STATEMENT_TYPE
from fedentity.defaults import SIGNING_ALGORITHMS
from fedentity.entity_statement.configuration import EntityConfiguration
from fedentity.exception import FedEntityError
from fedentity.exception import MalformedSignature
from fedentity.exception import MissingKeyID
from fedentity.exception import MissingTypeHeader
from fedentity.exception import SignatureVerificationFailed
from fedentity.exception import UnknownSigningKey
from fedentity.exception import WrongSubject
from fedentity.keyset import KeySet
from fedentity.message import EntityStatement
from fedentity.message import jwks_keys

logger = logging.getLogger(__name__)


def _is_json_serialized(token: str) -> bool:
    try:
        json.loads(token)
    except ValueError:
        return False
    return True


def _factory(token: str):
    try:
        _jws = factory(token)
    except (TypeError, ValueError, KeyError, AttributeError, JWKESTException) as err:
        raise MalformedSignature(f"failed to parse JWS: {err}") from err

    if _jws is None:
        raise MalformedSignature("failed to parse JWS")
    return _jws


def parse_compact_jws(token: str, algorithms: List[str]):
    """
    Parses a compact serialized JWS.

    :param token: The JWS
    :param algorithms: Acceptable signing algorithms
    :return: A :py:class:`cryptojwt.jws.jws.JWS` instance
    """
    token = as_unicode(token)

    # The JSON serializations are the only ones that can carry more then one signature and
    # entity statements never use them.
    if _is_json_serialized(token):
        _info = json.loads(token)
        if isinstance(_info, dict) and len(_info.get("signatures", [])) > 1:
            raise MalformedSignature("unexpected multi-signature JWS")
        raise MalformedSignature("only compact serialized JWS allowed")

    _jws = _factory(token)
    if not isinstance(_jws.jwt.headers, dict):
        raise MalformedSignature("JWS header is not a JSON object")

    _alg = _jws.jwt.headers.get("alg")
    if not isinstance(_alg, str) or _alg not in algorithms:
        raise MalformedSignature(f"signing algorithm '{_alg}' not allowed")

    return _jws


def unverified_payload(token: str) -> dict:
    """
    The payload of a JWS without verifying the signature. Must not be trusted.
    """
    return _factory(as_unicode(token)).jwt.payload()


def validate_entity_configuration(token: str,
                                  algorithms: Optional[List[str]] = None) -> EntityConfiguration:
    """
    Validates that a JWS is a correctly signed OIDF Entity Configuration. The keys used to
    verify the signature are found in the configuration itself.

    :param token: A compact serialized JWS
    :param algorithms: Acceptable signing algorithms, by default RSA PKCS1.5 and ECDSA
    :return: The verified EntityConfiguration
    :raises EntityStatementRejected: If the configuration can not be trusted
    """
    if algorithms is None:
        algorithms = SIGNING_ALGORITHMS

    _jws = parse_compact_jws(token, algorithms)
    _headers = _jws.jwt.headers

    if _headers.get("typ") != ENTITY_STATEMENT_TYPE:
        raise MissingTypeHeader(f"wrong or no type in JWS header: {_headers}")

    _kid = _headers.get("kid")
    if not _kid:
        raise MissingKeyID("JWS header must contain kid")
    if not isinstance(_kid, str):
        raise MalformedSignature(f"JWS header kid must be a string, not {_kid}")

    # To verify the signature, the kid in the header has to be found in the payload's JWKS.
    # So the payload is parsed without being trusted and nothing but the keys are used.
    try:
        _untrusted = _jws.jwt.payload()
        jwks_keys(_untrusted["jwks"], "entity statement")
        _untrusted_keys = KeySet.from_dict(_untrusted["jwks"])
    except (MessageException, KeyError, TypeError, ValueError, AttributeError, JWKESTException,
            KeyIOError) as err:
        raise MalformedSignature(f"could not parse JWS payload: {err}") from err

    verification_keys = _untrusted_keys.by_kid(_kid)
    if len(verification_keys) != 1:
        raise UnknownSigningKey(
            f"found {len(verification_keys)} keys in JWKS matching header kid {_kid}")

    try:
        _payload = _jws.verify_compact(as_unicode(token), keys=verification_keys)
    except (JWKESTException, KeyIOError, ValueError, TypeError) as err:
        logger.info(f"Signature verification failed: {err}")
        raise SignatureVerificationFailed(f"failed to validate JWS signature: {err}") from err

    try:
        _statement = EntityStatement(**_payload)
        _statement.verify()
        entity_configuration = EntityConfiguration.from_message(_statement)
    except (MessageException, KeyError, TypeError, ValueError, AttributeError, JWKESTException,
            KeyIOError, FedEntityError) as err:
        raise MalformedSignature(f"could not unmarshal JWS payload: {err}") from err

    if entity_configuration.issuer != entity_configuration.subject:
        raise WrongSubject(
            f"issuer {entity_configuration.issuer} and subject {entity_configuration.subject} "
            f"of an entity configuration must be the same")

    return entity_configuration
