"""De-duplication of resolved members."""

from typing import Iterable, List

from modules.membership.models import Member


def unique_by_email(members: Iterable[Member]) -> List[Member]:
    """Keep the first occurrence of every member key, preserving order.

    The key is the lower-cased email (``Member.key``), so ``A@co`` and
    ``a@co`` are the same identity. Entries without an email fall back to
    their directory id.
    """
    seen: set[str] = set()
    unique: List[Member] = []
    for member in members:
        key = member.key
        if key in seen:
            continue
        seen.add(key)
        unique.append(member)
    return unique
