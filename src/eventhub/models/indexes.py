from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

ASC = 1
DESC = -1


@dataclass(frozen=True)
class IndexSpec:
    """A secondary index declared by an entity; applied by db.mongo.ensure_indexes."""

    keys: List[Tuple[str, int]]
    unique: bool = False

    @property
    def name(self) -> str:
        return "_".join(f"{field}_{direction}" for field, direction in self.keys)

    def options(self) -> Dict:
        opts: Dict = {"name": self.name}
        if self.unique:
            opts["unique"] = True
        return opts
