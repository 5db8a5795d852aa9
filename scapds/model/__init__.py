"""
Scapds Model Module
In-memory representation of a data-stream collection and its references.
"""
from scapds.model.references import Reference, ReferenceKind
from scapds.model.collection import (
    Catalog,
    CatalogEntry,
    Collection,
    Component,
    ComponentRef,
    Container,
    DataStream,
)

__all__ = [
    "Reference",
    "ReferenceKind",
    "Catalog",
    "CatalogEntry",
    "Collection",
    "Component",
    "ComponentRef",
    "Container",
    "DataStream",
]
