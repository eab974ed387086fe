"""Read-only navigation annotations over a node tree.

The model carries navigation hints but does not navigate: a navigator in
the host application reads these annotations to decide which node comes
next.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel

from assessment_model.models import (
    ActiveStepCommand,
    BaseActiveStep,
    ContentNode,
    Node,
    NodeContainer,
    Question,
    ReservedNavigationIdentifier,
    SurveyRule,
)


class NavigationAnnotation(BaseModel):
    """Navigation hints carried by one node."""

    identifier: str
    next_node_identifier: str | None = None
    survey_rules: list[SurveyRule] = []
    commands: frozenset[ActiveStepCommand] = frozenset()

    @property
    def exits(self) -> bool:
        """Whether the explicit next node ends the assessment."""
        return ReservedNavigationIdentifier.EXIT.matches(self.next_node_identifier)


def navigation_annotation(node: Node) -> NavigationAnnotation:
    """Collect the navigation hints of a node."""
    return NavigationAnnotation(
        identifier=node.identifier,
        next_node_identifier=node.next_node_identifier if isinstance(node, ContentNode) else None,
        survey_rules=list(node.survey_rules) if isinstance(node, Question) else [],
        commands=node.commands if isinstance(node, BaseActiveStep) else frozenset(),
    )


def first_matching_rule(question: Question, answer: Any) -> SurveyRule | None:
    """Return the first survey rule, in declared order, that the answer triggers."""
    for rule in question.survey_rules:
        if rule.matches(answer):
            return rule
    return None


def skip_target(question: Question, answer: Any) -> str | None:
    """Identifier to skip to for an answer, or None to continue in order."""
    rule = first_matching_rule(question, answer)
    return rule.skip_to_identifier if rule is not None else None


def iter_nodes(root: Node) -> Iterator[tuple[list[str], Node]]:
    """Walk a tree depth-first, yielding each node with its identifier path."""
    stack: list[tuple[list[str], Node]] = [([root.identifier], root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        if isinstance(node, NodeContainer):
            for child in reversed(node.children):
                stack.append((path + [child.identifier], child))


def find_node(root: Node, path: list[str] | str) -> Node | None:
    """Find a node by its identifier path below the root.

    Args:
        root: Root of the tree.
        path: Child identifiers from the root, as a list or slash-joined string.
            The root's own identifier is not part of the path.
    """
    if isinstance(path, str):
        path = [part for part in path.split("/") if part]
    node: Node | None = root
    for identifier in path:
        if not isinstance(node, NodeContainer):
            return None
        node = node.child(identifier)
    return node
