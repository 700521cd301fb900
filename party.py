"""
MPC participant implementation.
Each party is a small virtual machine with id-addressed memory.
"""

import logging

from errors import DuplicateIdentifier, MissingIdentifier
from field import Mersenne61

logger = logging.getLogger(__name__)


class Share:
    """
    Additive share of a secret-shared value.

    `value` is the summand held by one party, not the hidden secret. `id` is
    the logical identifier the value was distributed under; all parties use
    the same id for their shares of one secret.
    """

    __slots__ = ('id', 'value')

    def __init__(self, id, value):
        self.id = id
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Share):
            return NotImplemented
        return self.id == other.id and self.value == other.value

    __hash__ = None

    def __repr__(self):
        return f"Share({self.id!r}, {self.value!r})"


class Party:
    """
    Participant in an MPC protocol.

    Memory is split into private values (known in the clear by this party,
    public values included) and shares of secret-shared values. A third map
    records precomputed multiplication triples by triple id.
    """

    def __init__(self, party_id, field=Mersenne61):
        """
        Args:
            party_id: Unique id of the party within a protocol run
            field: Field element class the party computes in
        """
        self.party_id = party_id
        self.field = field

        self.private_values = {}  # id -> field element
        self.shares = {}  # id -> Share
        self.triples = {}  # triple id -> (id_a, id_b, id_c)

    def insert_private(self, id, value):
        """
        Store a value in private memory.

        Only the share memory is checked for a clash; an existing private
        value with the same id is overwritten.
        """
        if id in self.shares:
            raise DuplicateIdentifier(id, self.party_id)
        self.private_values[id] = value

    def insert_share(self, id, share):
        """Store a share in share memory."""
        if id in self.shares:
            raise DuplicateIdentifier(id, self.party_id)
        self.shares[id] = share

    def get_private(self, id):
        """Return the private value stored under id."""
        try:
            return self.private_values[id]
        except KeyError:
            raise MissingIdentifier(id, self.party_id, 'private') from None

    def get_share(self, id):
        """Return the share stored under id."""
        try:
            return self.shares[id]
        except KeyError:
            raise MissingIdentifier(id, self.party_id) from None

    def has_share(self, id):
        return id in self.shares

    def remove_share(self, id):
        """Drop a share, freeing the id. Returns the share or None."""
        return self.shares.pop(id, None)

    def insert_triple(self, triple_id, share_ids):
        """Register the share ids (a, b, c) of a multiplication triple."""
        if triple_id in self.triples:
            raise DuplicateIdentifier(triple_id, self.party_id, 'triples')
        id_a, id_b, id_c = share_ids
        self.triples[triple_id] = (id_a, id_b, id_c)

    def get_triple(self, triple_id):
        try:
            return self.triples[triple_id]
        except KeyError:
            raise MissingIdentifier(triple_id, self.party_id, 'triples') from None

    def remove_triple(self, triple_id):
        """Forget a triple and drop its shares."""
        share_ids = self.triples.pop(triple_id, None)
        if share_ids is not None:
            for id in share_ids:
                self.remove_share(id)
            logger.debug("Party %s consumed triple %s", self.party_id, triple_id)
        return share_ids

    def __repr__(self):
        return (f"Party({self.party_id!r}, private={sorted(self.private_values)}, "
                f"shares={sorted(self.shares)})")
