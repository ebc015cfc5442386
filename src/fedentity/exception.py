class FedEntityError(Exception):
    pass


class InvalidURL(FedEntityError):
    pass


class InvalidIdentifier(InvalidURL):
    pass


class KeyGenerationError(FedEntityError):
    pass


class UnsupportedKeyType(KeyGenerationError):
    pass


class EntityStatementRejected(FedEntityError):
    """
    The statement must not be trusted. The subclasses exist so that the cause can be told
    apart when debugging, callers are expected to treat them all the same way.
    """
    pass


class MalformedSignature(EntityStatementRejected):
    pass


class MissingTypeHeader(EntityStatementRejected):
    pass


class MissingKeyID(EntityStatementRejected):
    pass


class UnknownSigningKey(EntityStatementRejected):
    pass


class SignatureVerificationFailed(EntityStatementRejected):
    pass


class WrongSubject(EntityStatementRejected):
    pass


class MetadataNotFound(FedEntityError):
    pass


class NoEnrollmentKey(FedEntityError):
    pass


class FailedConfigurationRetrieval(FedEntityError):
    pass
