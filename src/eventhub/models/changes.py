from __future__ import annotations

from typing import Iterable, Mapping, Optional, Set


def changed_fields(
    incoming: Mapping,
    previous: Optional[Mapping],
    fields: Iterable[str],
) -> Set[str]:
    """
    Which of `fields` a write touches.

    With no previous record every field counts as changed; otherwise only
    fields present in `incoming` whose value differs from the stored one.
    """
    fields = set(fields)
    if previous is None:
        return fields
    return {f for f in fields if f in incoming and incoming[f] != previous.get(f)}
