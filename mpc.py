"""
Secret-sharing protocols over a set of parties.

All protocols use additive secret sharing: a value is shared when the sum of
the shares held by the parties equals it. Linear operations are computed
locally by every party; multiplication consumes a Beaver triple
(a, b, c = a*b) and opens two masked values.

Communication is simulated: sending a value to a party means writing it
into that party's memory under the agreed id. Every protocol checks its
inputs over the whole party set before writing, so a failing call leaves
the parties' memory unchanged.

Beaver triples are not produced by a protocol here; generate_triple samples
them centrally and hands out random shares.
"""

import logging

from errors import DuplicateIdentifier, OwnerNotFound
from field import Field
from party import Share

logger = logging.getLogger(__name__)

# Ids reserved for intermediate values of subtract_protocol / mult_protocol.
SUBTRACTION_ID = 'subtraction'
EPSILON_ID = 'epsilon'
DELTA_ID = 'delta'
T1_ID = 't1'
T2_ID = 't2'
SUM_ID = 'sum'
SUMC_ID = 'sumc'
EPSDELT_ID = 'epsdelt'

MULT_SCRATCH_IDS = (EPSILON_ID, DELTA_ID, T1_ID, T2_ID, SUM_ID, SUMC_ID, EPSDELT_ID,
                    SUBTRACTION_ID)


def _require_parties(parties):
    if not parties:
        raise ValueError("A protocol needs at least one party")
    party_ids = [party.party_id for party in parties]
    if len(set(map(id, parties))) != len(parties) or len(set(party_ids)) != len(party_ids):
        raise ValueError(f"A party appears more than once in {party_ids}")


def _as_element(field, value):
    """Embed a plain int into the parties' field."""
    if isinstance(value, Field):
        return value
    return field(value)


def _check_shares(parties, *ids):
    """Raise MissingIdentifier unless every party holds a share for each id."""
    for party in parties:
        for id in ids:
            party.get_share(id)


def _check_free(parties, *ids):
    """Raise DuplicateIdentifier if any party already holds one of ids."""
    if len(set(ids)) != len(ids):
        duplicated = next(id for id in ids if ids.count(id) > 1)
        raise DuplicateIdentifier(duplicated)
    for party in parties:
        for id in ids:
            if party.has_share(id):
                raise DuplicateIdentifier(id, party.party_id)


def _split(value, n_parties, rng):
    """
    Split value into n_parties additive shares.

    The first n - 1 shares are fresh random elements; the last one is value
    minus their sum.
    """
    field = type(value)
    parts = []
    total = field(0)
    for _ in range(n_parties - 1):
        random_elem = field.random(rng)
        total = total.add(random_elem)
        parts.append(random_elem)
    parts.append(value.subtract(total))
    return parts


def distribute_shares(var_id, owner_id, parties, rng):
    """
    Distribute shares of a private value among a set of parties.

    The party whose id is owner_id must hold var_id in its private memory.
    Every party ends up with one share stored under var_id, and the shares
    add up to the owner's value.
    """
    _require_parties(parties)

    owner = next((party for party in parties if party.party_id == owner_id), None)
    if owner is None:
        raise OwnerNotFound(owner_id)

    secret = _as_element(owner.field, owner.get_private(var_id))
    _check_free(parties, var_id)

    for party, part in zip(parties, _split(secret, len(parties), rng)):
        party.insert_share(var_id, Share(var_id, part))

    logger.debug("%s distributed %s among %d parties", owner_id, var_id, len(parties))


def simulate_random_dist(id, parties, value, rng):
    """
    Hand out random additive shares of a value nobody owns.

    Used to deal correlated randomness such as Beaver triples.
    """
    _require_parties(parties)
    value = _as_element(parties[0].field, value)
    _check_free(parties, id)

    parts = _split(value, len(parties), rng)
    for party in parties:
        party.insert_share(id, Share(id, parts.pop()))


def distribute_pub_value(public_value, id, parties):
    """
    Share a publicly known value.

    The first party's share is the value itself and the others hold zero,
    so public constants can be combined with secret-shared values.
    """
    _require_parties(parties)
    value = _as_element(parties[0].field, public_value)
    _check_free(parties, id)

    zero = type(value)(0)
    parties[0].insert_share(id, Share(id, value))
    for party in parties[1:]:
        party.insert_share(id, Share(id, zero))


def add_protocol(parties, id_a, id_b, id_result):
    """
    Add two secret-shared values.

    Each party adds its own shares locally; the result shares are stored
    under id_result.
    """
    _require_parties(parties)
    _check_shares(parties, id_a, id_b)
    _check_free(parties, id_result)

    for party in parties:
        value_sum = party.get_share(id_a).value.add(party.get_share(id_b).value)
        party.insert_share(id_result, Share(id_result, value_sum))

    logger.debug("Added %s + %s -> %s", id_a, id_b, id_result)


def multiply_by_const_protocol(parties, public_value, id, id_result):
    """Multiply a secret-shared value by a public constant."""
    _require_parties(parties)
    value = _as_element(parties[0].field, public_value)
    _check_shares(parties, id)
    _check_free(parties, id_result)

    for party in parties:
        value_mult = party.get_share(id).value.multiply(value)
        party.insert_share(id_result, Share(id_result, value_mult))

    logger.debug("Scaled %s by a public constant -> %s", id, id_result)


def subtract_protocol(parties, id_a, id_b, id_result):
    """
    Subtract two secret-shared values: id_result = id_a + (-1) * id_b.

    The intermediate id is removed from every party afterwards.
    """
    _require_parties(parties)
    _check_shares(parties, id_a, id_b)
    _check_free(parties, id_result, SUBTRACTION_ID)

    minus_one = parties[0].field(1).negate()
    try:
        multiply_by_const_protocol(parties, minus_one, id_b, SUBTRACTION_ID)
        add_protocol(parties, id_a, SUBTRACTION_ID, id_result)
    finally:
        for party in parties:
            party.remove_share(SUBTRACTION_ID)


def reconstruct_share(parties, id):
    """
    Open a secret-shared value by summing every party's share.

    Only call this where the protocol allows the caller to learn the value.
    """
    _require_parties(parties)
    _check_shares(parties, id)

    shares = [party.get_share(id).value for party in parties]
    value = shares[0]
    for share_value in shares[1:]:
        value = value.add(share_value)
    return value


def generate_triple(parties, id_triple, rng, triple_id=None):
    """
    Deal shares of a random multiplication triple (a, b, c = a * b).

    This simulates a triple-generation protocol. When triple_id is given,
    the three share ids are also registered with every party under it, so
    mult_protocol can refer to the triple by name and consume it.
    """
    _require_parties(parties)
    id_a, id_b, id_c = id_triple
    _check_free(parties, id_a, id_b, id_c)
    if triple_id is not None:
        for party in parties:
            if triple_id in party.triples:
                raise DuplicateIdentifier(triple_id, party.party_id, 'triples')

    field = parties[0].field
    a = field.random(rng)
    b = field.random(rng)
    c = a.multiply(b)

    simulate_random_dist(id_a, parties, a, rng)
    simulate_random_dist(id_b, parties, b, rng)
    simulate_random_dist(id_c, parties, c, rng)

    if triple_id is not None:
        for party in parties:
            party.insert_triple(triple_id, (id_a, id_b, id_c))

    logger.debug("Generated triple (%s, %s, %s) for %d parties", id_a, id_b, id_c, len(parties))


def mult_protocol(parties, id_x, id_y, id_result, triple):
    """
    Multiply two secret-shared values using a Beaver triple.

    With epsilon = x - a and delta = y - b opened:
        x * y = c + epsilon * b + delta * a + epsilon * delta

    Args:
        parties: List of Party instances
        id_x, id_y: Ids of the shared factors
        id_result: Id for the shares of the product
        triple: Tuple (id_a, id_b, id_c) of triple share ids, or the id of a
            triple registered by generate_triple. A registered triple is
            consumed by the call.
    """
    _require_parties(parties)

    triple_id = None
    if isinstance(triple, str):
        triple_id = triple
        registered = [party.get_triple(triple_id) for party in parties]
        id_a, id_b, id_c = registered[0]
    else:
        id_a, id_b, id_c = triple

    _check_shares(parties, id_x, id_y, id_a, id_b, id_c)
    _check_free(parties, id_result, *MULT_SCRATCH_IDS)

    try:
        subtract_protocol(parties, id_x, id_a, EPSILON_ID)
        subtract_protocol(parties, id_y, id_b, DELTA_ID)

        # Safe to open: a and b stay secret and mask x and y.
        epsilon = reconstruct_share(parties, EPSILON_ID)
        delta = reconstruct_share(parties, DELTA_ID)

        multiply_by_const_protocol(parties, epsilon, id_b, T1_ID)
        multiply_by_const_protocol(parties, delta, id_a, T2_ID)

        add_protocol(parties, T1_ID, T2_ID, SUM_ID)
        add_protocol(parties, SUM_ID, id_c, SUMC_ID)

        distribute_pub_value(epsilon.multiply(delta), EPSDELT_ID, parties)
        add_protocol(parties, SUMC_ID, EPSDELT_ID, id_result)
    finally:
        # Free intermediate ids so later protocols can reuse them.
        for party in parties:
            for scratch_id in MULT_SCRATCH_IDS:
                party.remove_share(scratch_id)

    if triple_id is not None:
        for party in parties:
            party.remove_triple(triple_id)

    logger.debug("Multiplied %s * %s -> %s", id_x, id_y, id_result)
