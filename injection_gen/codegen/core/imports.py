"""
Import tracking and symbol resolution.

Generated files reference symbols from other packages. The tracker records
every package such a reference needs and assigns each one a local alias; the
resolver validates references against the type universe before they are
handed to templates.
"""

import re
import threading
from typing import Callable, Dict, Iterable, List, Optional, Set

from ...logging_config import get_logger
from .types import Symbol, SymbolKind, TypeUniverse

logger = get_logger(__name__)

PATH_SEPARATOR = "/"


def default_alias_candidates(path: str) -> List[str]:
    """
    Alias candidates for an import path, shortest first.

    Each candidate joins a trailing run of path segments with characters that
    are illegal in identifiers removed: ``k8s.io/api/apps/v1`` yields
    ``v1``, ``appsv1``, ``apiappsv1``, ``k8sioapiappsv1``.
    """
    dirs = [d for d in path.split(PATH_SEPARATOR) if d]
    candidates = []
    for n in range(len(dirs) - 1, -1, -1):
        name = re.sub(r"[._\-]", "", "".join(dirs[n:]))
        if name and name not in candidates:
            candidates.append(name)
    return candidates


def default_import_line(alias: str, path: str) -> str:
    return f'{alias} "{path}"'


class ImportTracker:
    """
    Records the packages a generated file imports.

    Aliases are assigned when one is first asked for: pending paths are
    visited in sorted order and each takes its first candidate not already
    taken. Everything tracked before that point gets aliases that depend
    only on the set of paths, never on the order they were added. An alias,
    once assigned, never changes; paths tracked later take what is left.
    Two paths never share an alias and a path never gets two aliases.
    """

    def __init__(
        self,
        local_package: Optional[str] = None,
        alias_candidates: Callable[[str], List[str]] = default_alias_candidates,
        import_line: Callable[[str, str], str] = default_import_line,
    ):
        self.local_package = local_package
        self._alias_candidates = alias_candidates
        self._import_line = import_line
        self._paths: Set[str] = set()
        self._aliases: Dict[str, str] = {}
        self._lock = threading.Lock()

    def add_package(self, path: str) -> None:
        """Track an import path. The local package is never imported."""
        if not path or path == self.local_package:
            return
        with self._lock:
            if path not in self._paths:
                logger.debug("Tracking import %s", path)
                self._paths.add(path)

    def add_symbol(self, symbol: Symbol) -> None:
        self.add_package(symbol.package)

    def add_packages(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.add_package(path)

    def _assign_aliases(self) -> Dict[str, str]:
        aliases = self._aliases
        pending = self._paths.difference(aliases)
        if not pending:
            return aliases

        taken: Set[str] = set(aliases.values())
        for path in sorted(pending):
            candidates = self._alias_candidates(path) or ["pkg"]
            alias = None
            for candidate in candidates:
                if candidate not in taken:
                    alias = candidate
                    break
            if alias is None:
                # every candidate is taken: number the longest one
                stem = candidates[-1]
                counter = 2
                while f"{stem}{counter}" in taken:
                    counter += 1
                alias = f"{stem}{counter}"
            aliases[path] = alias
            taken.add(alias)

        return aliases

    def local_name_of(self, path: str) -> str:
        """Alias for path, tracking it first if needed."""
        if not path or path == self.local_package:
            raise ValueError(f"Package {path!r} is local and has no import alias")
        self.add_package(path)
        with self._lock:
            return self._assign_aliases()[path]

    def path_of(self, alias: str) -> Optional[str]:
        """Import path tracked under alias, if any."""
        with self._lock:
            for path, name in self._assign_aliases().items():
                if name == alias:
                    return path
        return None

    def import_lines(self) -> List[str]:
        """Deduplicated import lines sorted by path."""
        with self._lock:
            aliases = self._assign_aliases()
            return [self._import_line(aliases[path], path) for path in sorted(aliases)]

    def __contains__(self, path: str) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)


class SymbolResolver:
    """Binds abstract references to symbols usable in generated text."""

    def __init__(
        self,
        universe: TypeUniverse,
        tracker: ImportTracker,
        local_package: Optional[str] = None,
    ):
        self.universe = universe
        self.tracker = tracker
        self.local_package = local_package

    def lookup(self, package: str, name: str, kind: SymbolKind) -> Symbol:
        """
        Validate a reference without importing its package.

        Raises:
            UnknownSymbolError: If the universe does not know the symbol
        """
        return self.universe.resolve(package, name, kind)

    def resolve(self, package: str, name: str, kind: SymbolKind) -> Symbol:
        """
        Validate a reference and track its package for import.

        Raises:
            UnknownSymbolError: If the universe does not know the symbol
        """
        symbol = self.lookup(package, name, kind)
        self.tracker.add_symbol(symbol)
        return symbol

    def qualified_name(self, symbol: Symbol) -> str:
        """How generated code spells symbol, e.g. ``injection.RegisterInformer``."""
        if symbol.package == self.local_package:
            return symbol.name.name
        return f"{self.tracker.local_name_of(symbol.package)}.{symbol.name.name}"
