"""
Errors raised by the participant memory store and the protocol engine.
"""


class MPCError(Exception):
    """Base class for all protocol errors."""


class DuplicateIdentifier(MPCError, KeyError):
    """An identifier is already taken in the namespace being written."""

    def __init__(self, identifier, party_id=None, namespace='shares'):
        self.identifier = identifier
        self.party_id = party_id
        self.namespace = namespace
        if party_id is None:
            message = f"The id {identifier!r} is used more than once"
        else:
            message = f"Party {party_id!r} already holds id {identifier!r} in its {namespace} memory"
        super().__init__(message)

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class MissingIdentifier(MPCError, KeyError):
    """An identifier is not registered in the party's memory."""

    def __init__(self, identifier, party_id=None, namespace='shares'):
        self.identifier = identifier
        self.party_id = party_id
        self.namespace = namespace
        super().__init__(
            f"The id {identifier!r} is not registered in the {namespace} memory of party {party_id!r}"
        )

    def __str__(self):
        return self.args[0]


class OwnerNotFound(MPCError, LookupError):
    """No party in the given set has the requested owner id."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"No party with id {identifier!r} in the party set")


class ZeroInverse(MPCError, ZeroDivisionError):
    """Raised when inverting the additive identity of a field."""

    def __init__(self):
        super().__init__("Cannot invert zero")
