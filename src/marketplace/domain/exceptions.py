"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI, HTTP) can catch them uniformly.  Each class carries
the HTTP status code the REST API answers with.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    http_status = 500


class ValidationError(DomainException):
    """The request itself is malformed (empty cart, bad page size, ...)."""

    http_status = 400


class UnauthorizedError(DomainException):
    """No valid actor is behind the request."""

    http_status = 401


class ForbiddenError(DomainException):
    """The actor is known but not entitled to the requested effect."""

    http_status = 403


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or is not visible to the actor)."""

    http_status = 404


class ConflictError(DomainException):
    """A concurrent request changed the entity between read and write."""

    http_status = 409
