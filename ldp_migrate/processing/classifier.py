import logging
from pathlib import Path
from typing import Optional

from rdflib import Graph, Literal, URIRef

from ..errors import AmbiguousContainerError, MalformedGraphError
from ..graph.models import ClassificationResult
from ..graph.vocabulary import (
    CONTENT_LOCATION_HEADER,
    CONTENT_TYPE_HEADER,
    EXTERNAL_BODY_PREFIX,
    EXTERNAL_BODY_URL_PATTERN,
    HAS_MIME_TYPE,
    LDP_BASIC_CONTAINER,
    LDP_CONTAINER,
    LDP_CONTAINER_TYPES,
    LDP_NON_RDF_SOURCE,
    LINK_HEADER,
    LOCATION_HEADER,
    OCTET_STREAM,
    RDF_TYPE,
)

logger = logging.getLogger(__name__)


def build_type_link(iri: str) -> str:
    """Link header value declaring an rdf:type"""
    return f'<{iri}>; rel="type"'


def extract_external_url(mime_type: str) -> Optional[str]:
    """Pull the url="..." parameter out of a message/external-body MIME type"""
    match = EXTERNAL_BODY_URL_PATTERN.fullmatch(mime_type)
    if match is None:
        return None
    return match.group(1)


class ResourceClassifier:
    """
    Classify a resource graph and rewrite it for the target format.

    Classification, rewriting and header assembly happen in one pass over a
    snapshot of the graph's triples:
    - rdf:type statements flag binaries and containers and each add a Link value
    - ebucore:hasMimeType statements either add a Content-Type value or, for
      message/external-body, are replaced by application/octet-stream and set
      Location / Content-Location from the embedded URL
    - a container without a concrete container type gets ldp:BasicContainer
    """

    def __init__(self, source: Optional[Path] = None):
        self.source = source

    def classify(self, graph: Graph) -> ClassificationResult:
        result = ClassificationResult()

        # Snapshot: the graph is mutated while we walk it
        for subject, predicate, obj in list(graph):
            if predicate == RDF_TYPE:
                self._visit_type(result, subject, obj)
            if predicate == HAS_MIME_TYPE:
                self._visit_mime_type(graph, result, subject, predicate, obj)

        facts = result.facts
        if facts.is_container and not facts.has_concrete_container_type:
            graph.add((facts.container_subject, RDF_TYPE, LDP_BASIC_CONTAINER))
            facts.rewritten = True
            logger.debug("Added ldp:BasicContainer to %s", facts.container_subject)

        logger.debug(
            "%s: binary=%s external=%s container=%s concrete=%s rewritten=%s",
            self.source or "<graph>",
            facts.is_binary,
            facts.is_external,
            facts.is_container,
            facts.has_concrete_container_type,
            facts.rewritten,
        )
        return result

    def _visit_type(self, result: ClassificationResult, subject, obj) -> None:
        if not isinstance(obj, URIRef):
            raise MalformedGraphError(
                self.source, f"rdf:type of {subject} is not an IRI: {obj!r}"
            )

        facts = result.facts
        if obj == LDP_NON_RDF_SOURCE:
            facts.is_binary = True
        elif obj == LDP_CONTAINER:
            if facts.container_subject is not None and facts.container_subject != subject:
                raise AmbiguousContainerError(
                    self.source,
                    f"both {facts.container_subject} and {subject} are typed ldp:Container",
                )
            facts.is_container = True
            facts.container_subject = subject
        elif obj in LDP_CONTAINER_TYPES:
            facts.has_concrete_container_type = True

        result.headers.setdefault(LINK_HEADER, []).append(build_type_link(str(obj)))

    def _visit_mime_type(self, graph: Graph, result: ClassificationResult, subject, predicate, obj) -> None:
        if not isinstance(obj, Literal):
            raise MalformedGraphError(
                self.source, f"MIME type of {subject} is not a literal: {obj!r}"
            )

        value = str(obj)
        logger.debug("MIME type value=%s", value)

        if not value.startswith(EXTERNAL_BODY_PREFIX):
            result.headers.setdefault(CONTENT_TYPE_HEADER, []).append(value)
            return

        external_url = extract_external_url(value)
        logger.debug("external URL=%s", external_url)

        graph.remove((subject, predicate, obj))
        graph.add((subject, predicate, Literal(OCTET_STREAM)))
        result.facts.rewritten = True

        if external_url is not None:
            result.headers[LOCATION_HEADER] = [external_url]
            result.headers[CONTENT_LOCATION_HEADER] = [external_url]
            result.facts.is_external = True
        else:
            logger.warning(
                "%s: external-body MIME type without a url parameter: %s",
                self.source or "<graph>",
                value,
            )


def classify_graph(graph: Graph, source: Optional[Path] = None) -> ClassificationResult:
    """Convenience wrapper around ResourceClassifier"""
    return ResourceClassifier(source).classify(graph)
