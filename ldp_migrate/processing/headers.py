import json
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, List

from ..graph.models import ResourceFacts

logger = logging.getLogger(__name__)


def headers_path_for(output_path: Path, facts: ResourceFacts, suffix: str = ".headers") -> Path:
    """
    Sidecar location for a migrated description file.

    Binary descriptions live one level below the binary they describe, so
    their headers go next to that directory as `<dir>.binary.headers` or
    `<dir>.external.headers`. Everything else gets `<file><suffix>`.
    """
    output_path = Path(output_path).absolute()
    if facts.is_binary:
        kind = ".external" if facts.is_external else ".binary"
        return output_path.parent.with_name(output_path.parent.name + kind + suffix)
    return output_path.with_name(output_path.name + suffix)


def render_headers(headers: Dict[str, List[str]]) -> str:
    """Header map as a compact JSON object, keys in insertion order"""
    return json.dumps(headers, separators=(",", ":"))


def atomic_write(path: Path, data: bytes) -> None:
    """
    Write bytes to path through a temp file in the same directory.

    An existing target keeps its permission bits; a new one gets the
    umask default, as a plain open() would.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.parent / f".{path.name}.tmp"
    try:
        with open(temp_path, "wb") as f:
            f.write(data)
        if path.exists():
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def write_headers_file(headers: Dict[str, List[str]], path: Path) -> Path:
    """Write (or overwrite) a sidecar header file"""
    atomic_write(path, render_headers(headers).encode("utf-8"))
    logger.debug("Wrote headers %s", path)
    return Path(path)
