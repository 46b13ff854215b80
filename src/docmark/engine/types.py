# topmark:header:start
#
#   project      : DocMark
#   file         : types.py
#   file_relpath : src/docmark/engine/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types exchanged between the scanner, the mutator and the runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from docmark.tokens.model import TokenKind


@dataclass(frozen=True, slots=True)
class BackwardScan:
    """Result of a backward scan over skippable tokens.

    Attributes:
        stop_index (int | None): Index of the first token that could not be
            skipped, or None when the scan ran off the start of the stream.
        furthest_index (int | None): Left-most modifier/attribute token that was
            skipped, or None when only whitespace (or nothing) was skipped.
    """

    stop_index: int | None
    furthest_index: int | None


@dataclass(frozen=True, slots=True)
class DeclarationSite:
    """A structural declaration located in a token stream.

    Transient: indexes are valid for the stream layout at the time the site
    was yielded.

    Attributes:
        keyword_index (int): Position of the structural keyword token.
        kind (TokenKind): Kind of the keyword (class, interface, trait, enum).
        name (str): Declared name, or ``""`` when it could not be resolved.
        docblock_index (int | None): Position of the adjacent doc comment, if any.
        insert_index (int): Where a new doc block goes (before any modifiers
            and attributes of the declaration).
    """

    keyword_index: int
    kind: TokenKind
    name: str
    docblock_index: int | None
    insert_index: int


class FixAction(Enum):
    """What the mutation engine did for one declaration site.

    Members:
        INSERTED: A new doc block was inserted.
        MERGED: The existing block was merged with the configured tags.
        REPLACED: The existing block was replaced by the configured tags.
        UNCHANGED: The existing block already matched; nothing changed.
    """

    INSERTED = "inserted"
    MERGED = "merged"
    REPLACED = "replaced"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True)
class FixOutcome:
    """Outcome of `docmark.engine.mutator.apply_docblock` for one site.

    Attributes:
        site (DeclarationSite): The processed site.
        action (FixAction): What happened.
        shift (int): Number of tokens inserted (all of them before the keyword).
    """

    site: DeclarationSite
    action: FixAction
    shift: int = 0


@dataclass(kw_only=True)
class FixReport:
    """Summary of a scan-and-apply pass over one token stream.

    Attributes:
        outcomes (list[FixOutcome]): One entry per processed declaration, in source order.
    """

    outcomes: list[FixOutcome] = field(default_factory=lambda: [])

    @property
    def changed(self) -> bool:
        """True when at least one declaration was modified."""
        return any(o.action is not FixAction.UNCHANGED for o in self.outcomes)

    def count(self, action: FixAction) -> int:
        """Return how many sites ended with ``action``."""
        return sum(1 for o in self.outcomes if o.action is action)
