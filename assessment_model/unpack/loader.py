"""Loader that fetches, decodes, and unpacks an assessment by name."""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from assessment_model.diagnostics.collector import LoadReport
from assessment_model.diagnostics.models import LoadDiagnostic
from assessment_model.errors import (
    AssessmentModelError,
    ResourceNotFoundError,
    UnpackTypeMismatchError,
)
from assessment_model.models import Assessment
from assessment_model.registry.types import TypeRegistry
from assessment_model.resources.provider import DirectoryResourceProvider, ResourceProvider
from assessment_model.resources.registry import AssessmentRegistryProvider
from assessment_model.serialization.codec import DecodePolicy, decode_node, loads_node
from assessment_model.unpack.engine import UnpackContext, resolve_assessment

logger = logging.getLogger(__name__)


class LoaderConfig(BaseModel):
    """Configuration for the assessment loader."""

    resource_root: Path | None = None
    policy: DecodePolicy = DecodePolicy.STRICT
    match_children: bool = False


class LoadResult(BaseModel):
    """Result of loading one assessment.

    The assessment is None when the load failed; the diagnostic says why.
    """

    assessment: Assessment | None
    diagnostic: LoadDiagnostic
    success: bool

    model_config = ConfigDict(arbitrary_types_allowed=True)


class AssessmentLoader:
    """Fetches, decodes, and unpacks assessments."""

    def __init__(
        self,
        config: LoaderConfig,
        resources: ResourceProvider | None = None,
        registry_provider: AssessmentRegistryProvider | None = None,
        type_registry: TypeRegistry | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            config: Loader configuration.
            resources: Resource provider. If not provided and the config names
                a resource root, a DirectoryResourceProvider is created.
            registry_provider: Optional source of originals and decoders.
            type_registry: Type registry. Defaults to the process-wide one.
        """
        self.config = config
        if resources is None and config.resource_root is not None:
            resources = DirectoryResourceProvider(config.resource_root)
        self.resources = resources
        self.registry_provider = registry_provider
        self.type_registry = type_registry

    def _context(self, report: LoadReport) -> UnpackContext:
        return UnpackContext(
            resources=self.resources,
            registry_provider=self.registry_provider,
            type_registry=self.type_registry,
            policy=self.config.policy,
            match_children=self.config.match_children,
            report=report,
        )

    def _resolve(self, report: LoadReport, decode: Any) -> LoadResult:
        stage = "decode"
        assessment = None
        try:
            root = decode()
            stage = "unpack"
            assessment = resolve_assessment(root, self._context(report))
        except ResourceNotFoundError as e:
            report.record_failure(e, "fetch")
        except UnpackTypeMismatchError as e:
            report.record_failure(e, "unpack")
        except AssessmentModelError as e:
            report.record_failure(e, stage)

        diagnostic = report.finalize()
        if assessment is None:
            logger.error(f"Failed to load {report.resource}: {diagnostic.errors[0].message}")
        return LoadResult(
            assessment=assessment,
            diagnostic=diagnostic,
            success=assessment is not None,
        )

    def load(self, name: str, version: str | None = None) -> LoadResult:
        """Load an assessment resource by name."""
        report = LoadReport(f"{name}@{version}" if version else name)

        def fetch_and_decode() -> Any:
            if self.resources is None:
                raise ResourceNotFoundError(name, version)
            data = self.resources.fetch_resource(name, version)
            return loads_node(data, self.type_registry, self.config.policy, report)

        return self._resolve(report, fetch_and_decode)

    def load_data(self, data: dict[str, Any], resource: str = "<memory>") -> LoadResult:
        """Load an assessment from an already parsed JSON object."""
        report = LoadReport(resource)
        return self._resolve(
            report,
            lambda: decode_node(data, self.type_registry, self.config.policy, report),
        )

    def load_batch(self, names: list[str]) -> list[LoadResult]:
        """Load several assessments by name."""
        return [self.load(name) for name in names]
