import json
import sys

import pytest
import responses

from fedentity import display
from fedentity.configure import create_from_config_file
from fedentity.configure import DEFAULT_FED_FILE_ATTRIBUTE_NAMES
from fedentity.configure import FedEntityConfiguration
from fedentity.defaults import ENTITY_CONFIGURATION_CONTENT_TYPE
from fedentity.entity import Entity
from tests import ACME_DIRECTORY
from tests import ENTITY_ID

CONF = {
    "entity_id": ENTITY_ID,
    "acme_requestor": True,
    "acme_issuer": ACME_DIRECTORY,
    "authority_hints": ["https://ta.example"],
    "webserver": {
        "domain": "127.0.0.1",
        "port": 8443
    },
    "logging": {
        "version": 1,
        "root": {
            "handlers": ["default"],
            "level": "DEBUG"
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default"
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
            }
        }
    }
}


def test_configuration():
    config = FedEntityConfiguration(CONF)
    assert config.entity_id == ENTITY_ID
    assert config.acme_requestor is True
    assert config.acme_issuer == ACME_DIRECTORY
    assert config.authority_hints == ["https://ta.example"]
    assert config.webserver["port"] == 8443
    assert config.logging["version"] == 1


def test_configuration_defaults():
    config = FedEntityConfiguration({"entity_id": ENTITY_ID})
    assert config.acme_requestor is False
    assert config.acme_issuer is None
    assert config.authority_hints == []
    assert config.webserver == {"domain": "0.0.0.0"}
    assert config.logging is None


def test_configuration_missing_entity_id():
    with pytest.raises(ValueError):
        FedEntityConfiguration({"acme_requestor": True})


def test_from_file(tmp_path):
    _file = tmp_path / "entity.json"
    _file.write_text(json.dumps(CONF))

    config = create_from_config_file(str(_file))
    entity = Entity.from_config(config)
    assert str(entity.entity_id) == ENTITY_ID
    assert entity.acme_requestor_keys
    assert entity.acme_directory == ACME_DIRECTORY


def test_display(monkeypatch, capsys):
    entity = Entity(ENTITY_ID)
    monkeypatch.setattr(sys, "argv", ["fedentity.display", ENTITY_ID])

    with responses.RequestsMock() as rsps:
        rsps.add("GET", f"{ENTITY_ID}/.well-known/openid-federation",
                 body=entity.current_configuration(),
                 adding_headers={"Content-Type": ENTITY_CONFIGURATION_CONTENT_TYPE},
                 status=200)
        display.main()

    _out = capsys.readouterr().out
    _json = _out[_out.index("\n") + 1:]
    assert json.loads(_json)["sub"] == ENTITY_ID


def test_file_attributes():
    # Only logging file names are paths, nothing is served over TLS
    assert DEFAULT_FED_FILE_ATTRIBUTE_NAMES == ["filename"]
    config = FedEntityConfiguration({"entity_id": ENTITY_ID})
    assert "server_key" not in config
    assert "server_cert" not in config
