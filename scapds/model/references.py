"""
Typed fragment references.

An ``href`` on a component-ref names a component (``#<component-id>``), a
catalog ``uri`` names another component-ref of the same data-stream
(``#<component-ref-id>``). Both are parsed once, when the model is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

FRAGMENT_MARKER = "#"


class ReferenceKind(Enum):
    """What a fragment reference points at."""
    COMPONENT = "component"
    COMPONENT_REF = "component-ref"


@dataclass(frozen=True)
class Reference:
    """
    A validated local fragment reference.

    Attributes:
        kind: Target kind of the reference
        identifier: Bare id of the target, without the leading '#'
    """

    kind: ReferenceKind
    identifier: str

    @classmethod
    def parse(cls, value: Optional[str], kind: ReferenceKind) -> Optional["Reference"]:
        """
        Parse ``#<id>`` into a Reference.

        Returns None when the value is missing, lacks the leading '#', or
        carries no id after it.
        """
        if not value or not value.startswith(FRAGMENT_MARKER) or len(value) < 2:
            return None
        return cls(kind=kind, identifier=value[1:])

    @classmethod
    def to_component(cls, component_id: str) -> "Reference":
        return cls(ReferenceKind.COMPONENT, component_id)

    @classmethod
    def to_component_ref(cls, ref_id: str) -> "Reference":
        return cls(ReferenceKind.COMPONENT_REF, ref_id)

    @property
    def fragment(self) -> str:
        """The ``#<id>`` attribute form."""
        return f"{FRAGMENT_MARKER}{self.identifier}"

    def __str__(self) -> str:
        return self.fragment
