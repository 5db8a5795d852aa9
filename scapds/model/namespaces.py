"""
Namespace URIs and element names of the source data-stream schema.
"""

DS_NS = "http://scap.nist.gov/schema/scap/source/1.2"
XLINK_NS = "http://www.w3.org/1999/xlink"
CATALOG_NS = "urn:oasis:names:tc:entity:xmlns:xml:catalog"

DS_PREFIX = "ds"
XLINK_PREFIX = "xlink"
CATALOG_PREFIX = "cat"

NSMAP = {
    DS_PREFIX: DS_NS,
    XLINK_PREFIX: XLINK_NS,
    CATALOG_PREFIX: CATALOG_NS,
}

COLLECTION = "data-stream-collection"
DATA_STREAM = "data-stream"
COMPONENT = "component"
EXTENDED_COMPONENT = "extended-component"
COMPONENT_REF = "component-ref"
CATALOG = "catalog"
CATALOG_URI = "uri"

DICTIONARIES = "dictionaries"
CHECKLISTS = "checklists"
CHECKS = "checks"
EXTENDED_COMPONENTS = "extended-components"

# Document order of the containers inside a data-stream.
CONTAINERS = (DICTIONARIES, CHECKLISTS, CHECKS, EXTENDED_COMPONENTS)
COMPONENT_ELEMENTS = (COMPONENT, EXTENDED_COMPONENT)


def ds(name: str) -> str:
    """Clark notation for an element in the data-stream namespace."""
    return f"{{{DS_NS}}}{name}"


def xlink(name: str) -> str:
    return f"{{{XLINK_NS}}}{name}"


def catalog(name: str) -> str:
    return f"{{{CATALOG_NS}}}{name}"
