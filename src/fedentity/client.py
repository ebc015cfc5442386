import logging
from typing import Callable
from typing import Optional

import requests

from fedentity.defaults import ENTITY_CONFIGURATION_CONTENT_TYPE
from fedentity.entity_statement.configuration import EntityConfiguration
from fedentity.entity_statement.verify import validate_entity_configuration
from fedentity.exception import FailedConfigurationRetrieval
from fedentity.exception import WrongSubject
from fedentity.identifier import Identifier

logger = logging.getLogger(__name__)


def fetch_entity_configuration(entity_id: str,
                               httpc: Optional[Callable] = None,
                               httpc_params: Optional[dict] = None,
                               tenant: Optional[bool] = False) -> EntityConfiguration:
    """
    Fetches the Entity Configuration published by an entity and verifies it.

    :param entity_id: The entity identifier
    :param httpc: HTTP client, same signature as :py:func:`requests.request`
    :param httpc_params: Extra arguments to the HTTP client, like {"verify": False}
    :param tenant: Whether the well-known path is below the path of the identifier
    :return: A verified EntityConfiguration
    """
    _entity_id = Identifier(entity_id)
    _url = _entity_id.well_known_url(tenant=tenant)
    httpc = httpc or requests.request
    httpc_params = httpc_params or {}

    logger.debug(f"Fetching entity configuration from {_url}")
    try:
        response = httpc("GET", _url, **httpc_params)
    except requests.exceptions.RequestException as err:
        raise FailedConfigurationRetrieval(f"could not fetch {_url}: {err}") from err

    if response.status_code != 200:
        raise FailedConfigurationRetrieval(
            f"fetching {_url} returned {response.status_code}: {response.text}")

    _content_type = response.headers.get("Content-Type", "")
    if not _content_type.startswith(ENTITY_CONFIGURATION_CONTENT_TYPE):
        logger.warning(f"Unexpected content type from {_url}: {_content_type}")

    entity_configuration = validate_entity_configuration(response.text)
    if entity_configuration.subject != _entity_id:
        raise WrongSubject(
            f"got entity configuration for {entity_configuration.subject}, expected {_entity_id}")

    return entity_configuration
