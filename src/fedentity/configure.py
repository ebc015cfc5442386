import logging
from typing import Dict
from typing import List
from typing import Optional

from idpyoidc.configure import Base
from idpyoidc.util import load_config_file

logger = logging.getLogger(__name__)

# Relative paths under these keys, like a logging FileHandler's filename, get base_path prefixed
DEFAULT_FED_FILE_ATTRIBUTE_NAMES = ['filename']

DEFAULT_WEBSERVER_CONFIG = {
    "domain": "0.0.0.0"
}


class FedEntityConfiguration(Base):
    """
    Configuration of a single federation entity.

    Recognized keys: entity_id (required), acme_requestor, acme_issuer, authority_hints,
    webserver and logging.
    """
    uris = ["entity_id", "acme_issuer"]

    def __init__(self,
                 conf: Dict,
                 base_path: str = '',
                 file_attributes: Optional[List[str]] = None,
                 domain: Optional[str] = "",
                 port: Optional[int] = 0,
                 ):
        file_attributes = file_attributes or DEFAULT_FED_FILE_ATTRIBUTE_NAMES

        Base.__init__(self, conf=conf, base_path=base_path, file_attributes=file_attributes,
                      domain=domain, port=port)

        if not conf.get("entity_id"):
            raise ValueError("Missing entity_id in configuration")

        self.entity_id = conf["entity_id"]
        self.acme_requestor = bool(conf.get("acme_requestor", False))
        self.acme_issuer = conf.get("acme_issuer")
        self.authority_hints = conf.get("authority_hints", [])
        self.webserver = conf.get("webserver", DEFAULT_WEBSERVER_CONFIG)
        self.logging = conf.get("logging")


def create_from_config_file(filename: str, base_path: Optional[str] = "") -> FedEntityConfiguration:
    """Reads a JSON or YAML configuration file."""
    _cnf = load_config_file(filename)
    logger.debug(f"Loaded configuration from {filename}")
    return FedEntityConfiguration(_cnf, base_path=base_path)
