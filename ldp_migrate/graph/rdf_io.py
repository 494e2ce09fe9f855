import logging
from pathlib import Path

from rdflib import Graph

from ..errors import GraphParseError, GraphSerializationError

logger = logging.getLogger(__name__)


def load_graph(path: Path, rdf_format: str = "turtle") -> Graph:
    """Parse a description file into a fresh graph"""
    graph = Graph()
    try:
        graph.parse(source=Path(path).as_posix(), format=rdf_format)
    except Exception as exc:
        raise GraphParseError(path, f"cannot parse as {rdf_format}: {exc}") from exc

    logger.debug("Parsed %d triples from %s", len(graph), path)
    return graph


def serialize_graph(graph: Graph, rdf_format: str = "turtle", path: Path | None = None) -> bytes:
    """
    Serialize a graph to bytes in the given notation.

    The path is only used to attribute errors to the file being migrated.
    """
    try:
        data = graph.serialize(format=rdf_format, encoding="utf-8")
    except Exception as exc:
        raise GraphSerializationError(path, f"cannot serialize as {rdf_format}: {exc}") from exc
    return data
