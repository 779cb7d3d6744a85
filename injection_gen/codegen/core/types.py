"""
Type universe representation for code generation.

Describes the Go types a generator works on and the external symbols
(functions, types, variables) generated code may reference.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple


class UnknownSymbolError(LookupError):
    """Raised when a package or symbol is not part of the type universe."""

    def __init__(self, package: str, name: str, reason: str = "not found"):
        self.package = package
        self.name = name
        super().__init__(f"Unknown symbol {package}.{name}: {reason}")


class SymbolKind(Enum):
    """Kinds of symbols generated code can reference."""

    FUNCTION = "function"
    TYPE = "type"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Name:
    """Fully qualified identity of a type or symbol."""

    package: str
    name: str

    def __str__(self) -> str:
        if not self.package:
            return self.name
        return f"{self.package}.{self.name}"


@dataclass(frozen=True)
class GroupVersion:
    """API group and version a type belongs to."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


@dataclass(frozen=True)
class Symbol:
    """An external function, type or variable referenced by generated code."""

    name: Name
    kind: SymbolKind

    @property
    def package(self) -> str:
        return self.name.package


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Metadata for one data type in the universe.

    Identity is the (package, name) pair; comment lines do not take part
    in equality or hashing.
    """

    name: Name
    comment_lines: Tuple[str, ...] = field(default=(), compare=False)
    second_closest_comment_lines: Tuple[str, ...] = field(default=(), compare=False)
    methods: Tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self):
        """Normalize list inputs so instances stay immutable and hashable."""
        for attr in ("comment_lines", "second_closest_comment_lines", "methods"):
            value = getattr(self, attr)
            if not isinstance(value, tuple):
                object.__setattr__(self, attr, tuple(value))

    @property
    def package(self) -> str:
        return self.name.package

    @property
    def all_comment_lines(self) -> List[str]:
        """Inherited comment lines followed by the type's own lines."""
        return list(self.second_closest_comment_lines) + list(self.comment_lines)


class TypeUniverse(Protocol):
    """What a generator needs from the set of known packages."""

    def resolve(self, package: str, name: str, kind: SymbolKind) -> Symbol: ...


class Universe:
    """In-memory type universe supplied by the driver."""

    def __init__(self):
        self._symbols: Dict[str, Dict[str, SymbolKind]] = {}
        self._types: Dict[Name, TypeDescriptor] = {}

    def add_package(
        self,
        path: str,
        functions: Iterable[str] = (),
        types: Iterable[str] = (),
        variables: Iterable[str] = (),
    ) -> "Universe":
        """
        Register a package and the symbols it exports.

        Adding the same package twice merges the symbol sets.

        Returns:
            The universe itself, for chaining
        """
        symbols = self._symbols.setdefault(path, {})
        for kind, names in (
            (SymbolKind.FUNCTION, functions),
            (SymbolKind.TYPE, types),
            (SymbolKind.VARIABLE, variables),
        ):
            for name in names:
                symbols[name] = kind
        return self

    def add_type(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Register a type descriptor; it is also resolvable as a TYPE symbol."""
        self._types[descriptor.name] = descriptor
        self._symbols.setdefault(descriptor.package, {})[
            descriptor.name.name
        ] = SymbolKind.TYPE
        return descriptor

    def type(self, name: Name) -> Optional[TypeDescriptor]:
        """Return the descriptor registered under name, if any."""
        return self._types.get(name)

    def packages(self) -> List[str]:
        return sorted(self._symbols)

    def resolve(self, package: str, name: str, kind: SymbolKind) -> Symbol:
        """
        Look up a symbol.

        Raises:
            UnknownSymbolError: If the package or name is unknown, or the
                symbol is registered with a different kind
        """
        symbols = self._symbols.get(package)
        if symbols is None:
            raise UnknownSymbolError(package, name, "package not in universe")

        registered = symbols.get(name)
        if registered is None:
            raise UnknownSymbolError(package, name)

        if registered != kind:
            raise UnknownSymbolError(
                package,
                name,
                f"registered as {registered.value}, requested as {kind.value}",
            )

        return Symbol(Name(package, name), kind)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Universe":
        """
        Build a universe from a JSON-style description.

        Expected shape::

            {
                "packages": {
                    "<path>": {"functions": [...], "types": [...], "variables": [...]}
                },
                "types": [
                    {"package": "...", "name": "...", "comments": [...],
                     "second_closest_comments": [...]}
                ]
            }
        """
        universe = cls()

        for path, symbols in (data.get("packages") or {}).items():
            universe.add_package(
                path,
                functions=symbols.get("functions", ()),
                types=symbols.get("types", ()),
                variables=symbols.get("variables", ()),
            )

        for entry in data.get("types") or ():
            universe.add_type(
                TypeDescriptor(
                    name=Name(entry["package"], entry["name"]),
                    comment_lines=entry.get("comments", ()),
                    second_closest_comment_lines=entry.get(
                        "second_closest_comments", ()
                    ),
                    methods=entry.get("methods", ()),
                )
            )

        return universe
