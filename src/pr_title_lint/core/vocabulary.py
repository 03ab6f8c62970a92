"""
Type and scope vocabulary checks.
[CTX:PBI-1:1-4:VOCAB]

Types and plain scopes come from closed, configured sets. Scopes may also name
a component from the registry in the form "<component name> Node"; the
registry is consulted only when a scope is not in the static vocabulary.
"""
import logging
from collections.abc import Callable, Collection, Sequence
from typing import Optional

from .issues import Issue, IssueKind, MessageCatalog

logger = logging.getLogger(__name__)

NameLookup = Callable[[], Sequence[str]]
ClosestMatch = Callable[[str, Sequence[str]], str]


def check_type_present(type_: Optional[str], messages: MessageCatalog) -> Optional[Issue]:
    """Report TYPE_NOT_FOUND when the schema captured no type."""
    if not type_:
        return messages.issue(IssueKind.TYPE_NOT_FOUND)
    return None


def check_type_known(
    type_: Optional[str],
    types: Collection[str],
    messages: MessageCatalog,
) -> Optional[Issue]:
    """Report INVALID_TYPE when the type is not in the vocabulary (case-sensitive)."""
    if type_ not in types:
        return messages.issue(IssueKind.INVALID_TYPE)
    return None


def is_valid_node_scope(scope: str, node_names: Sequence[str], suffix: str) -> bool:
    """
    Check for a "<component name> Node" scope.

    The part before the suffix only has to start with a registered name, so
    "HTTP Request V2 Node" is accepted when "HTTP Request" is registered.
    """
    if not scope.endswith(suffix):
        return False

    prefix = scope[: -len(suffix)]
    return any(prefix.startswith(name) for name in node_names)


def check_scope(
    scope: Optional[str],
    scopes: Collection[str],
    node_names: NameLookup,
    suffix: str,
    closest: ClosestMatch,
    messages: MessageCatalog,
) -> Optional[Issue]:
    """
    Report INVALID_SCOPE for a scope that is neither a known area nor a known node.

    For an invalid node-style scope, the message is extended with the closest
    registered component name.
    """
    if not scope or scope in scopes:
        return None

    names = node_names()
    if is_valid_node_scope(scope, names, suffix):
        return None

    suggestion = ""
    if scope.endswith(suffix) and names:
        component = scope[: -len(suffix)]
        best = closest(component, names)
        logger.debug("Suggesting %r for unknown node scope %r", best, scope)
        suggestion = f". Did you mean `{best}{suffix}`?"

    return messages.issue(IssueKind.INVALID_SCOPE, suggestion)
