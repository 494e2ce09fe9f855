import logging
import os
import shutil
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import MigrationSettings, get_settings
from ..errors import ConfigurationError, MigrationError, TraversalError
from ..graph.models import ClassificationResult, FileResult, FileStatus, MigrationSummary
from ..graph.rdf_io import load_graph, serialize_graph
from .classifier import classify_graph
from .headers import atomic_write, headers_path_for, write_headers_file

logger = logging.getLogger(__name__)


class MigrationPipeline:
    """
    Mirror an export tree into the output root, migrating description files.

    Every file is copied verbatim. Description files are then parsed,
    classified and rewritten. Outputs are written through temp files and
    renamed into place, so a failure never leaves a half-written file.
    A failing file is reported and the walk moves on.
    """

    def __init__(self, settings: Optional[MigrationSettings] = None):
        if settings is None:
            settings = get_settings().migration
        if settings.input_dir is None or settings.output_dir is None:
            raise ConfigurationError("Both an input and an output directory are required")

        self.settings = settings
        self.input_dir = Path(settings.input_dir).absolute()
        self.output_dir = Path(settings.output_dir).absolute()

        if self.input_dir == self.output_dir:
            raise ConfigurationError(f"Output directory must differ from input directory: {self.input_dir}")

    def run(self) -> MigrationSummary:
        """Migrate the whole tree and return the per-file results"""
        logger.info("Processing directory: %s", self.input_dir)
        files = list(self.iter_source_files())
        logger.info("Found %d files", len(files))

        # Every file is copied before any description is migrated, so a
        # sidecar never races the verbatim copy of a file at the same path.
        results = dict(zip(files, self._map(self.copy_file, [[path] for path in files])))

        # A binary description in D writes D.parent/<D.name>.binary.headers,
        # so all writers of one sidecar share a grandparent directory.
        groups = defaultdict(list)
        for path, result in results.items():
            if result.status == FileStatus.COPIED and self.is_description_file(result.destination):
                groups[path.parent.parent].append(path)

        for migrated in self._map(self.migrate_file, list(groups.values())):
            results[migrated.source] = migrated

        summary = MigrationSummary(
            input_dir=self.input_dir,
            output_dir=self.output_dir,
            results=[results[path] for path in files]
        )
        logger.info(
            "Migration complete: %d files, %d migrated, %d rewritten, %d failed",
            summary.total, summary.migrated, summary.rewritten, summary.failed
        )
        return summary

    def _map(self, func, groups: List[List[Path]]) -> List[FileResult]:
        """Apply func to every path, one group per worker"""
        def _run_group(paths: List[Path]) -> List[FileResult]:
            return [func(path) for path in paths]

        if self.settings.max_workers == 1:
            batches = map(_run_group, groups)
            return [result for batch in batches for result in batch]

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            batches = executor.map(_run_group, groups)
            return [result for batch in batches for result in batch]

    def iter_source_files(self) -> Iterator[Path]:
        """Yield every regular file under the input root"""
        if not self.input_dir.is_dir():
            raise TraversalError(f"Input directory not found or not a directory: {self.input_dir}")

        def _fail(error: OSError):
            raise TraversalError(f"Cannot walk {error.filename}: {error.strerror}") from error

        for root, dirs, names in os.walk(self.input_dir, onerror=_fail):
            dirs.sort()
            for name in sorted(names):
                path = Path(root) / name
                if path.is_file():
                    yield path

    def output_path_for(self, path: Path) -> Path:
        return self.output_dir / Path(path).absolute().relative_to(self.input_dir)

    def is_description_file(self, path: Path) -> bool:
        return str(path).endswith(self.settings.description_extension)

    def copy_file(self, path: Path) -> FileResult:
        """Copy one file verbatim to its mirrored location"""
        path = Path(path)
        destination = self.output_path_for(path)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("copy file %s to %s", path, destination)
            shutil.copy2(path, destination)
        except OSError as e:
            return self._failed(path, destination, e)

        if not self.is_description_file(destination):
            logger.info("Copied %s", destination)
        return FileResult(source=path, destination=destination, status=FileStatus.COPIED)

    def migrate_file(self, path: Path) -> FileResult:
        """Migrate the already copied output of a description file"""
        path = Path(path)
        destination = self.output_path_for(path)

        try:
            return self._migrate_description(path, destination)
        except (MigrationError, OSError) as e:
            return self._failed(path, destination, e)

    def _failed(self, path: Path, destination: Path, error: Exception) -> FileResult:
        logger.error("Failed to migrate %s: %s", path, error)
        return FileResult(
            source=path,
            destination=destination,
            status=FileStatus.FAILED,
            error=str(error)
        )

    def _migrate_description(self, source: Path, destination: Path) -> FileResult:
        graph = load_graph(destination, self.settings.rdf_format)
        result = classify_graph(graph, destination)
        headers_path = headers_path_for(destination, result.facts, self.settings.headers_suffix)
        logger.debug("headers path=%s", headers_path)

        # Serialize before touching the output tree
        rewritten = None
        if result.rewritten:
            rewritten = serialize_graph(graph, self.settings.rdf_format, destination)

        if rewritten is not None:
            atomic_write(destination, rewritten)
        write_headers_file(result.headers, headers_path)

        logger.info(
            "Migrated %s%s -> %s",
            destination,
            " (rewritten)" if result.rewritten else "",
            headers_path.name
        )
        return FileResult(
            source=source,
            destination=destination,
            status=FileStatus.MIGRATED,
            rewritten=result.rewritten,
            headers_path=headers_path
        )


def inspect_description(path: Path, rdf_format: str = "turtle") -> ClassificationResult:
    """Classify a description file in memory without writing anything"""
    graph = load_graph(path, rdf_format)
    return classify_graph(graph, path)
