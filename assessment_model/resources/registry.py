"""Host-side registry of original nodes and custom decoders.

An original is a locally authored node whose presentation fields overlay
the node decoded from a shared resource. A custom decoder lets a host parse
one assessment's payload differently, for example to read experimental
fields.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from assessment_model.models import AssessmentInfo, Node

NodeDecoder = Callable[[bytes], Node]


@runtime_checkable
class AssessmentRegistryProvider(Protocol):
    """Supplies registered originals and decoders to the unpack engine."""

    def registered_original(self, identifier: str) -> Node | None:
        """Return the locally registered node for an identifier, if any."""
        ...

    def registered_decoder(self, assessment_info: AssessmentInfo) -> NodeDecoder | None:
        """Return a custom decoder for an assessment, if any."""
        ...


class InMemoryRegistryProvider:
    """Registry provider backed by dicts."""

    def __init__(self) -> None:
        self._originals: dict[str, Node] = {}
        self._decoders: dict[str, NodeDecoder] = {}

    def register_original(self, node: Node, identifier: str | None = None) -> None:
        """Register an original under its identifier or an explicit one."""
        self._originals[identifier or node.identifier] = node

    def register_decoder(self, assessment_identifier: str, decoder: NodeDecoder) -> None:
        """Register a decoder for an assessment identifier."""
        self._decoders[assessment_identifier] = decoder

    def registered_original(self, identifier: str) -> Node | None:
        return self._originals.get(identifier)

    def registered_decoder(self, assessment_info: AssessmentInfo) -> NodeDecoder | None:
        return self._decoders.get(assessment_info.identifier)
