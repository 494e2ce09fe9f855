import re

from rdflib import Namespace
from rdflib.namespace import RDF

LDP = Namespace("http://www.w3.org/ns/ldp#")
EBUCORE = Namespace("http://www.ebu.ch/metadata/ontologies/ebucore/ebucore#")

RDF_TYPE = RDF.type
HAS_MIME_TYPE = EBUCORE.hasMimeType

LDP_NON_RDF_SOURCE = LDP.NonRDFSource
LDP_CONTAINER = LDP.Container
LDP_BASIC_CONTAINER = LDP.BasicContainer
LDP_CONTAINER_TYPES = frozenset({
    LDP.BasicContainer,
    LDP.DirectContainer,
    LDP.IndirectContainer,
})

# HTTP header names written to sidecar files
LINK_HEADER = "Link"
CONTENT_TYPE_HEADER = "Content-Type"
LOCATION_HEADER = "Location"
CONTENT_LOCATION_HEADER = "Content-Location"

EXTERNAL_BODY_PREFIX = "message/external-body"
OCTET_STREAM = "application/octet-stream"
EXTERNAL_BODY_URL_PATTERN = re.compile(r'^.*url="(.*)".*$', re.IGNORECASE)
