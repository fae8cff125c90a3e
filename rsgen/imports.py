from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# path -> type name -> entry; plain dicts keep first-seen order at both levels
ImportTable = dict[str, dict[str, "Import"]]


@dataclass
class Import:
    """A single imported type. Only its visibility is mutable."""
    visibility: str | None = None

    def vis(self, vis: str) -> Import:
        self.visibility = vis
        return self


def insert_import(table: ImportTable, path: str, ty: str) -> Import:
    """Return the entry for ``(path, ty)``, creating it on first use.

    A namespaced type such as ``"io::Error"`` imports its leading segment.
    """
    ty = ty.split("::", 1)[0]
    return table.setdefault(path, {}).setdefault(ty, Import())


def consolidate_imports(table: ImportTable) -> list[str]:
    """
    Turn the table into ``use`` statements, grouped by visibility and then
    by path. Groups, paths and type names all keep their first-seen order;
    nothing is sorted.
    """
    visibilities: list[str | None] = []
    for entries in table.values():
        for entry in entries.values():
            if entry.visibility not in visibilities:
                visibilities.append(entry.visibility)

    statements: list[str] = []
    for vis in visibilities:
        for path, entries in table.items():
            tys = [ty for ty, entry in entries.items() if entry.visibility == vis]
            if not tys:
                continue
            prefix = f"{vis} " if vis else ""
            names = tys[0] if len(tys) == 1 else "{" + ", ".join(tys) + "}"
            statements.append(f"{prefix}use {path}::{names};")

    logger.debug("Consolidated %d imported paths into %d statements.", len(table), len(statements))
    return statements
