from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from rdflib.term import Node


class ResourceFacts(BaseModel):
    """Facts derived from one pass over a resource graph"""
    is_binary: bool = Field(default=False, description="Typed ldp:NonRDFSource")
    is_container: bool = Field(default=False, description="Typed ldp:Container")
    is_external: bool = Field(default=False, description="External-body MIME type carried a URL")
    has_concrete_container_type: bool = Field(
        default=False,
        description="Typed with a Basic/Direct/Indirect container type"
    )
    container_subject: Optional[Node] = Field(None, description="Subject typed ldp:Container")
    rewritten: bool = Field(default=False, description="Graph was mutated and must be re-serialized")

    model_config = {"arbitrary_types_allowed": True}


class ClassificationResult(BaseModel):
    """Classification facts plus the header map assembled during the pass"""
    facts: ResourceFacts = Field(default_factory=ResourceFacts)
    headers: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def rewritten(self) -> bool:
        return self.facts.rewritten


class FileStatus(str, Enum):
    COPIED = "copied"
    MIGRATED = "migrated"
    FAILED = "failed"


class FileResult(BaseModel):
    """Outcome of migrating a single file"""
    source: Path
    destination: Path
    status: FileStatus
    rewritten: bool = False
    headers_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != FileStatus.FAILED


class MigrationSummary(BaseModel):
    """Aggregated outcome of a migration run"""
    input_dir: Path
    output_dir: Path
    results: List[FileResult] = Field(default_factory=list)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def copied(self) -> int:
        return self._count(FileStatus.COPIED)

    @property
    def migrated(self) -> int:
        return self._count(FileStatus.MIGRATED)

    @property
    def rewritten(self) -> int:
        return sum(1 for r in self.results if r.rewritten)

    @property
    def failures(self) -> List[FileResult]:
        return [r for r in self.results if r.status == FileStatus.FAILED]

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return self.failed == 0
