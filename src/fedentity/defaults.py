# https://openid.net/specs/openid-federation-1_0-41.html#name-obtaining-federation-entity
ENTITY_STATEMENT_TYPE = "entity-statement+jwt"
ENTITY_CONFIGURATION_PATH = "/.well-known/openid-federation"
ENTITY_CONFIGURATION_CONTENT_TYPE = "application/entity-statement+jwt"

# Federation entity endpoints
# https://openid.net/specs/openid-federation-1_0-41.html#section-5.1.1
FEDERATION_FETCH_ENDPOINT = "/federation-fetch"
FEDERATION_LIST_ENDPOINT = "/federation-list"
FEDERATION_RESOLVE_ENDPOINT = "/federation-resolve"

# Entity type identifiers
FEDERATION_ENTITY = "federation_entity"
ACME_REQUESTOR = "acme_requestor"
ACME_ISSUER = "acme_issuer"

# Seconds an entity configuration is valid for
ENTITY_CONFIGURATION_LIFETIME = 3600

# Signature algorithms accepted on an entity configuration
SIGNING_ALGORITHMS = ["RS256", "RS384", "RS512", "ES256", "ES384", "ES512"]

RSA_KEY_SIZE = 2048

FEDERATION_KEY_DEFS = [
    {"type": "RSA", "use": ["sig"]}
]

ACME_REQUESTOR_KEY_DEFS = [
    {"type": "RSA", "use": ["sig"]},
    {"type": "EC", "crv": "P-256", "use": ["sig"]}
]

FEDERATION_ENDPOINTS = {
    "entity_configuration": {
        "path": ENTITY_CONFIGURATION_PATH
    },
    "fetch": {
        "path": FEDERATION_FETCH_ENDPOINT,
        "metadata_parameter": "federation_fetch_endpoint"
    },
    "list": {
        "path": FEDERATION_LIST_ENDPOINT,
        "metadata_parameter": "federation_list_endpoint"
    },
    "resolve": {
        "path": FEDERATION_RESOLVE_ENDPOINT,
        "metadata_parameter": "federation_resolve_endpoint"
    }
}
