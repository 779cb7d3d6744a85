"""
Comment tag parsing.

Types carry generator directives in their documentation comments, one per
line, e.g. ``+genclient`` or ``+genclient:nonNamespaced``. This module
extracts them into a Tags record.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...logging_config import get_logger

logger = get_logger(__name__)

TAG_MARKER = "+"
GENCLIENT_PREFIX = "genclient:"
RESOURCE_NAME_TAG = "resourceName"

SUPPORTED_VERBS = (
    "create",
    "update",
    "updateStatus",
    "delete",
    "deleteCollection",
    "get",
    "list",
    "watch",
    "patch",
)

READONLY_VERBS = ("get", "list", "watch")

KNOWN_GENCLIENT_KEYS = {
    "nonNamespaced",
    "noVerbs",
    "onlyVerbs",
    "skipVerbs",
    "noStatus",
    "readonly",
    "method",
}


class MalformedTagError(ValueError):
    """Raised for a directive with invalid syntax or value."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(f"{message} (in comment line {line!r})")


@dataclass(frozen=True)
class CommentTag:
    """A single ``+key=value`` occurrence and the line it came from."""

    key: str
    value: str
    line: str


@dataclass
class Tags:
    """Directives parsed from a type's comments."""

    generate_client: bool = False
    non_namespaced: bool = False
    no_verbs: bool = False
    no_status: bool = False
    skip_verbs: List[str] = field(default_factory=list)
    resource_name: Optional[str] = None
    values: Dict[str, List[CommentTag]] = field(default_factory=dict)

    @property
    def namespaced(self) -> bool:
        return not self.non_namespaced

    def has_verb(self, verb: str) -> bool:
        if self.no_verbs:
            return False
        return verb not in self.skip_verbs


def extract_comment_tags(
    marker: str, lines: Sequence[str]
) -> Dict[str, List[CommentTag]]:
    """
    Collect ``<marker>key[=value]`` tags from comment lines.

    Lines not starting with the marker (after stripping whitespace) are
    skipped. Values of repeated keys are kept in order of appearance.
    """
    tags: Dict[str, List[CommentTag]] = {}

    for raw in lines:
        line = raw.strip()
        if not line.startswith(marker):
            continue

        body = line[len(marker):]
        key, _, value = body.partition("=")
        key = key.strip()
        if not key:
            continue

        tags.setdefault(key, []).append(CommentTag(key, value.strip(), raw))

    return tags


def _last(values: Dict[str, List[CommentTag]], key: str) -> Optional[CommentTag]:
    entries = values.get(key)
    return entries[-1] if entries else None


def _parse_verbs(tag: CommentTag) -> List[str]:
    verbs = [v.strip() for v in tag.value.split(",") if v.strip()]
    if not verbs:
        raise MalformedTagError(f"+{tag.key} requires a verb list", tag.line)

    for verb in verbs:
        if verb not in SUPPORTED_VERBS:
            raise MalformedTagError(
                f"+{tag.key} has unsupported verb {verb!r}", tag.line
            )
    return verbs


def parse_client_gen_tags(lines: Sequence[str], warn_unknown: bool = True) -> Tags:
    """
    Parse client generation directives.

    Pass inherited comment lines first and the type's own lines last; for a
    key given more than once the last occurrence wins.

    Args:
        lines: Comment lines to scan
        warn_unknown: Log unrecognised ``genclient:`` directives

    Returns:
        Parsed Tags

    Raises:
        MalformedTagError: If a directive has an invalid value
    """
    values = extract_comment_tags(TAG_MARKER, lines)
    tags = Tags(values=values)

    genclient = _last(values, "genclient")
    if genclient is not None:
        if genclient.value:
            raise MalformedTagError(
                f"+genclient={genclient.value} is invalid, use +genclient to "
                "generate a client or omit it to disable generation",
                genclient.line,
            )
        tags.generate_client = True

    legacy = _last(values, "nonNamespaced")
    if legacy is not None and legacy.value:
        raise MalformedTagError(
            f"+nonNamespaced={legacy.value} is invalid, use "
            "+genclient:nonNamespaced instead",
            legacy.line,
        )
    tags.non_namespaced = GENCLIENT_PREFIX + "nonNamespaced" in values

    legacy = _last(values, "readonly")
    if legacy is not None and legacy.value:
        raise MalformedTagError(
            f"+readonly={legacy.value} is invalid, use +genclient:readonly instead",
            legacy.line,
        )

    tags.no_verbs = GENCLIENT_PREFIX + "noVerbs" in values
    tags.no_status = GENCLIENT_PREFIX + "noStatus" in values

    only_verbs: List[str] = []
    restrict = False
    if GENCLIENT_PREFIX + "readonly" in values:
        only_verbs.extend(READONLY_VERBS)
        restrict = True

    skip = _last(values, GENCLIENT_PREFIX + "skipVerbs")
    if skip is not None:
        tags.skip_verbs = _parse_verbs(skip)

    only = _last(values, GENCLIENT_PREFIX + "onlyVerbs")
    if only is not None:
        only_verbs.extend(_parse_verbs(only))
        restrict = True

    if restrict:
        tags.skip_verbs = [v for v in SUPPORTED_VERBS if v not in only_verbs]

    resource = _last(values, RESOURCE_NAME_TAG)
    if resource is not None:
        if not resource.value:
            raise MalformedTagError(
                f"+{RESOURCE_NAME_TAG} requires a value", resource.line
            )
        tags.resource_name = resource.value

    if warn_unknown:
        for key, entries in values.items():
            if not key.startswith(GENCLIENT_PREFIX):
                continue
            directive = key[len(GENCLIENT_PREFIX):].split(":", 1)[0]
            if directive not in KNOWN_GENCLIENT_KEYS:
                logger.warning(
                    "Ignoring unknown directive +%s in %r", key, entries[-1].line
                )

    return tags
