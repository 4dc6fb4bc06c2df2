from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class NodeKind(str, Enum):
    CATEGORY = "category"
    TOPIC = "topic"


class Variant(str, Enum):
    """Alternative renderings of a topic's document."""

    QUESTIONS_ONLY = "questionsOnly"
    QUESTIONS_AND_ANSWERS = "questionsAndAnswers"

    @classmethod
    def parse(cls, value: str) -> "Variant":
        """Accept ``questionsOnly`` as well as ``questions-only`` / ``QUESTIONS_ONLY`` spellings."""

        normalized = value.replace("-", "").replace("_", "").strip().lower()
        for variant in cls:
            if variant.value.lower() == normalized:
                return variant
        raise ValueError(f"Unknown variant: {value!r}")


# Preference order when the caller does not ask for a variant.
DEFAULT_VARIANT_PREFERENCE: Tuple[Variant, ...] = (
    Variant.QUESTIONS_AND_ANSWERS,
    Variant.QUESTIONS_ONLY,
)


@dataclass(slots=True)
class NavigationNode:
    """One category or topic in the navigation tree."""

    slug: str
    title: str
    order: int
    kind: NodeKind
    path: Tuple[str, ...] = ()
    children: List["NavigationNode"] = field(default_factory=list)
    variants: Dict[Variant, str] = field(default_factory=dict)
    source_path: Tuple[str, ...] = ()
    parent: Optional["NavigationNode"] = field(default=None, repr=False, compare=False)

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def is_topic(self) -> bool:
        return self.kind is NodeKind.TOPIC

    @property
    def route(self) -> str:
        return "/" + "/".join(self.path)

    def default_variant(self) -> Variant | None:
        for variant in DEFAULT_VARIANT_PREFERENCE:
            if variant in self.variants:
                return variant
        return None

    def add_child(self, child: "NavigationNode") -> None:
        """Attach a child and derive its path from this node."""

        child.parent = self
        child.path = self.path + (child.slug,)
        self.children.append(child)

    def walk(self) -> Iterator["NavigationNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def first_topic(self) -> Optional["NavigationNode"]:
        """Return the first topic reachable in display order, if any."""

        if self.is_topic:
            return self
        for child in self.children:
            topic = child.first_topic()
            if topic is not None:
                return topic
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "slug": self.slug,
            "title": self.title,
            "order": self.order,
            "kind": self.kind.value,
            "path": list(self.path),
        }
        if self.is_topic:
            payload["variants"] = [variant.value for variant in DEFAULT_VARIANT_PREFERENCE if variant in self.variants]
        else:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


__all__ = ["DEFAULT_VARIANT_PREFERENCE", "NavigationNode", "NodeKind", "Variant"]
