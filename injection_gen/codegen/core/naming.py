"""
Naming systems for code generation.

A namer turns a type (or symbol) into the identifier a template should emit.
Templates pick a namer per placeholder, so each placeholder can have its own
pluralization, override and collision-avoidance rules.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Union

from .tags import TAG_MARKER, extract_comment_tags
from .types import Symbol, TypeDescriptor

VOWELS = set("aeiou")

Nameable = Union[TypeDescriptor, Symbol]


def ic(name: str) -> str:
    """Capitalize the first letter."""
    return name[:1].upper() + name[1:]


def il(name: str) -> str:
    """Lowercase the first letter."""
    return name[:1].lower() + name[1:]


def base_name(t: Nameable) -> str:
    """Unqualified name of a type or symbol."""
    return t.name.name


class Namer(ABC):
    """Produces a name for a type."""

    @abstractmethod
    def name(self, t: Nameable) -> str:
        pass


NameSystems = Dict[str, Namer]


def pluralize(singular: str, exceptions: Optional[Dict[str, str]] = None) -> str:
    """
    English plural of an identifier.

    Irregular nouns are looked up in exceptions (keyed by the singular form)
    before any suffix rule applies.
    """
    if exceptions and singular in exceptions:
        return exceptions[singular]

    if len(singular) < 2:
        return singular

    last = singular[-1]
    before = singular[-2]

    if last in "sxz":
        return singular + "es"
    if last == "y":
        if before.lower() not in VOWELS:
            return singular[:-1] + "ies"
        return singular + "s"
    if last == "h":
        if before in "cs":
            return singular + "es"
        return singular + "s"
    if last == "e":
        if before == "f":
            return singular[:-2] + "ves"
        return singular + "s"
    if last == "f":
        return singular[:-1] + "ves"
    return singular + "s"


class PluralNamer(Namer):
    """Pluralizes the type's base name and applies a case finalizer."""

    def __init__(
        self,
        exceptions: Optional[Dict[str, str]] = None,
        finalize: Callable[[str], str] = ic,
    ):
        self.exceptions = dict(exceptions or {})
        self.finalize = finalize

    def name(self, t: Nameable) -> str:
        return self.finalize(pluralize(base_name(t), self.exceptions))


def public_plural_namer(exceptions: Optional[Dict[str, str]] = None) -> PluralNamer:
    """Plural with a capitalized first letter, e.g. ``Widgets``."""
    return PluralNamer(exceptions, ic)


def private_plural_namer(exceptions: Optional[Dict[str, str]] = None) -> PluralNamer:
    """Plural with a lowercased first letter, e.g. ``widgetSets``."""
    return PluralNamer(exceptions, il)


def all_lowercase_plural_namer(
    exceptions: Optional[Dict[str, str]] = None,
) -> PluralNamer:
    """Fully lowercased plural, e.g. ``widgetsets``."""
    return PluralNamer(exceptions, str.lower)


def naming_key(t: Nameable) -> str:
    """
    Key used to look a type up in a naming exception table.

    The base name is doubled so the key space stays disjoint from the output
    of any plain pluralizing namer: ``example.com/api/v1.Widget`` is keyed as
    ``example.com/api/v1.WidgetWidget``.
    """
    return f"{t.name.package}.{t.name.name}{t.name.name}"


class ExceptionNamer(Namer):
    """
    Names types from an explicit exception table, delegating otherwise.

    The table lets a caller pin the generated name of specific types, e.g. to
    deconflict a resource named like its API group::

        {"k8s.io/api/events/v1beta1.EventEvent": "EventResource"}
    """

    def __init__(
        self,
        exceptions: Dict[str, str],
        delegate: Namer,
        key_func: Callable[[Nameable], str] = naming_key,
    ):
        self.exceptions = dict(exceptions)
        self.delegate = delegate
        self.key_func = key_func

    def name(self, t: Nameable) -> str:
        key = self.key_func(t)
        if key in self.exceptions:
            return self.exceptions[key]
        return self.delegate.name(t)


class TagOverrideNamer(Namer):
    """Uses a ``+<tag>=value`` comment tag when present, else the fallback."""

    def __init__(self, tag_name: str, fallback: Namer):
        self.tag_name = tag_name
        self.fallback = fallback

    def name(self, t: Nameable) -> str:
        if isinstance(t, TypeDescriptor):
            values = extract_comment_tags(TAG_MARKER, t.all_comment_lines)
            entries = values.get(self.tag_name)
            if entries and entries[-1].value:
                return entries[-1].value
        return self.fallback.name(t)


class RawNamer(Namer):
    """
    Emits the reference generated code uses for a type or symbol.

    Names in the local package stay bare; anything else is qualified with the
    import alias the tracker assigns to its package.
    """

    def __init__(self, local_package: str, tracker):
        self.local_package = local_package
        self.tracker = tracker

    def name(self, t: Nameable) -> str:
        package = t.name.package
        if not package or package == self.local_package:
            return t.name.name
        alias = self.tracker.local_name_of(package)
        return f"{alias}.{t.name.name}"
