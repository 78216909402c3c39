class DomainError(Exception):
    """Base class for errors the portal reports back to the caller."""


class ValidationError(DomainError):
    """A record or request breaks an invariant (marks out of range, missing id, bad date)."""


class AuthenticationError(DomainError):
    """Login failed: missing fields, or no user matches the id, password and role."""


class AuthorizationError(DomainError):
    """The signed-in role may not see or change the requested records."""
