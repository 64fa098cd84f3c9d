"""
Invitation code generation.

Codes are 8 characters drawn uniformly from ``A-Z0-9``. Uniqueness is only
guaranteed against the exclusion set passed in by the caller; the set is
updated in place so consecutive calls within a batch never collide.
"""

import logging
import random
import string
from typing import Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8

_system_random = random.SystemRandom()


def generate_invitation_code(exclusion: Set[str], rng: Optional[random.Random] = None) -> str:
    """
    Generate a code not present in ``exclusion`` and add it to the set.

    Args:
        exclusion: Codes already issued; mutated with the new code
        rng: Random source (defaults to ``random.SystemRandom``)

    Returns:
        The accepted 8-character code

    Note:
        Retries until a free code is found. A saturated exclusion set would
        loop forever; with 36**8 possible codes this is not handled.
    """
    rng = rng or _system_random
    attempts = 0

    while True:
        attempts += 1
        candidate = ''.join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
        if candidate not in exclusion:
            break

    if attempts > 1:
        logger.debug(f"Invitation code collision resolved after {attempts} attempts")

    exclusion.add(candidate)
    return candidate


def assign_invitation_codes(
    records: Iterable[Dict],
    exclusion: Set[str],
    rng: Optional[random.Random] = None
) -> List[Dict]:
    """
    Fill ``invitation_code`` on every record that lacks one.

    Explicit codes already on records are reserved first, so generated codes
    never clash with them.
    """
    records = list(records)

    for record in records:
        if record.get('invitation_code'):
            exclusion.add(record['invitation_code'])

    for record in records:
        if not record.get('invitation_code'):
            record['invitation_code'] = generate_invitation_code(exclusion, rng)

    return records
