"""
Document model of a source data-stream collection.

The lxml tree stays the single owner of the content; the classes here are
handles onto its elements, built once per parse, with id-keyed lookup
tables that keep the first match in document order.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import IO, Dict, Iterator, List, Optional, Union

from lxml import etree

from scapds.core.errors import EmptyComponentError, ReadError, SourceLocation
from scapds.model import namespaces as ns
from scapds.model.references import Reference, ReferenceKind

Source = Union[str, "os.PathLike[str]", IO[bytes]]


def local_name(element: etree._Element) -> Optional[str]:
    """Local part of an element's tag, None for comments and processing instructions."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def child_elements(parent: etree._Element, name: Optional[str] = None) -> Iterator[etree._Element]:
    """Element children of ``parent``, optionally only those with the given local name."""
    for child in parent:
        child_name = local_name(child)
        if child_name is None:
            continue
        if name is not None and child_name != name:
            continue
        yield child


def first_child_element(parent: etree._Element, name: Optional[str] = None) -> Optional[etree._Element]:
    return next(child_elements(parent, name), None)


def _href_of(element: etree._Element) -> Optional[str]:
    value = element.get(ns.xlink("href"))
    if value is None:
        value = element.get("href")
    return value


@dataclass
class CatalogEntry:
    """A ``uri`` entry: output file name plus a reference to another component-ref."""

    element: etree._Element
    name: Optional[str]
    raw_uri: Optional[str]
    uri: Optional[Reference]

    @classmethod
    def from_element(cls, element: etree._Element) -> "CatalogEntry":
        raw_uri = element.get("uri")
        return cls(
            element=element,
            name=element.get("name"),
            raw_uri=raw_uri,
            uri=Reference.parse(raw_uri, ReferenceKind.COMPONENT_REF),
        )


@dataclass
class Catalog:
    element: etree._Element
    entries: List[CatalogEntry] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: etree._Element) -> "Catalog":
        entries = [CatalogEntry.from_element(uri) for uri in child_elements(element, ns.CATALOG_URI)]
        return cls(element=element, entries=entries)

    def add_entry(self, name: str, ref_id: str) -> CatalogEntry:
        """Append a ``uri`` entry mapping ``name`` to component-ref ``ref_id``."""
        uri = Reference.to_component_ref(ref_id)
        element = etree.SubElement(self.element, ns.catalog(ns.CATALOG_URI))
        element.set("name", name)
        element.set("uri", uri.fragment)
        entry = CatalogEntry(element=element, name=name, raw_uri=uri.fragment, uri=uri)
        self.entries.append(entry)
        return entry


@dataclass
class ComponentRef:
    """
    Pointer from a data-stream container to a component.

    Attributes:
        element: The ``component-ref`` element
        id: Value of the ``id`` attribute, None when absent
        raw_href: The href attribute as written in the document
        href: Parsed href, None when missing or malformed
        container: Local name of the owning container
        catalog: Optional catalog of further component-refs
    """

    element: etree._Element
    id: Optional[str]
    raw_href: Optional[str]
    href: Optional[Reference]
    container: str
    catalog: Optional[Catalog] = None

    @classmethod
    def from_element(cls, element: etree._Element, container: str) -> "ComponentRef":
        raw_href = _href_of(element)
        catalog_element = first_child_element(element, ns.CATALOG)
        return cls(
            element=element,
            id=element.get("id"),
            raw_href=raw_href,
            href=Reference.parse(raw_href, ReferenceKind.COMPONENT),
            container=container,
            catalog=Catalog.from_element(catalog_element) if catalog_element is not None else None,
        )

    @property
    def line(self) -> Optional[int]:
        return self.element.sourceline


@dataclass
class Container:
    name: str
    element: etree._Element
    refs: List[ComponentRef] = field(default_factory=list)


@dataclass
class DataStream:
    """A data-stream and its component-ref containers, in document order."""

    element: etree._Element
    id: Optional[str]
    containers: List[Container] = field(default_factory=list)
    _refs_by_id: Dict[str, ComponentRef] = field(default_factory=dict, repr=False)

    @classmethod
    def from_element(cls, element: etree._Element) -> "DataStream":
        datastream = cls(element=element, id=element.get("id"))
        for container_element in child_elements(element):
            name = local_name(container_element)
            if name not in ns.CONTAINERS:
                continue
            container = Container(name=name, element=container_element)
            for ref_element in child_elements(container_element, ns.COMPONENT_REF):
                datastream._register(container, ComponentRef.from_element(ref_element, name))
            datastream.containers.append(container)
        return datastream

    def _register(self, container: Container, ref: ComponentRef):
        container.refs.append(ref)
        if ref.id is not None:
            self._refs_by_id.setdefault(ref.id, ref)

    def container(self, name: str) -> Optional[Container]:
        """First container with the given local name."""
        for container in self.containers:
            if container.name == name:
                return container
        return None

    @property
    def checklists(self) -> Optional[Container]:
        return self.container(ns.CHECKLISTS)

    def iter_component_refs(self) -> Iterator[ComponentRef]:
        """Every component-ref of every container, in document order."""
        for container in self.containers:
            yield from container.refs

    def component_ref(self, ref_id: str) -> Optional[ComponentRef]:
        """First component-ref with the given id, None when there is none."""
        return self._refs_by_id.get(ref_id)

    def add_component_ref(self, container_name: str, ref_id: str, href: Reference) -> ComponentRef:
        """Append a component-ref with an empty catalog to the named container."""
        container = self.container(container_name)
        if container is None:
            raise KeyError(f"data-stream has no '{container_name}' container")
        element = etree.SubElement(container.element, ns.ds(ns.COMPONENT_REF))
        element.set("id", ref_id)
        element.set(ns.xlink("href"), href.fragment)
        catalog_element = etree.SubElement(element, ns.catalog(ns.CATALOG))
        ref = ComponentRef(
            element=element,
            id=ref_id,
            raw_href=href.fragment,
            href=href,
            container=container_name,
            catalog=Catalog(element=catalog_element),
        )
        self._register(container, ref)
        return ref


@dataclass
class Component:
    element: etree._Element
    id: Optional[str]

    @property
    def inner_root(self) -> Optional[etree._Element]:
        """The single semantic element inside the component."""
        return first_child_element(self.element)


class Collection:
    """
    A parsed or freshly built data-stream collection.

    Usage:
        collection = Collection.parse("ssg-rhel7-ds.xml")
        datastream = collection.datastream()
        component = collection.component("scap_org.open-scap_comp_ssg-rhel7-xccdf.xml")
        tree = collection.clone_component(component)
    """

    def __init__(self, tree: etree._ElementTree, filename: Optional[str] = None):
        self.tree = tree
        self.filename = filename
        self.datastreams: List[DataStream] = []
        self.components: List[Component] = []
        self._components_by_id: Dict[str, Component] = {}
        self._index()

    @classmethod
    def parse(cls, source: Source) -> "Collection":
        """
        Parse a collection from a path or binary file object.

        Raises:
            ReadError: If the source is missing, unreadable or not a collection
        """
        if source is None or source == "":
            raise ReadError("No input file given.")
        if isinstance(source, (str, os.PathLike)):
            source = filename = os.fspath(source)
        else:
            filename = getattr(source, "name", None)
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        try:
            tree = etree.parse(source, parser)
        except (OSError, etree.XMLSyntaxError) as e:
            raise ReadError(
                f"Could not read/parse XML of given input file at path '{filename}'.",
                source=filename,
                hint=str(e),
            )
        root = tree.getroot()
        if local_name(root) != ns.COLLECTION:
            raise ReadError(
                f"Root element of '{filename}' is '{local_name(root)}', not '{ns.COLLECTION}'.",
                source=filename,
            )
        return cls(tree, filename=filename)

    @classmethod
    def new(cls, collection_id: Optional[str] = None) -> "Collection":
        """An empty collection declaring the ds, xlink and catalog prefixes."""
        root = etree.Element(ns.ds(ns.COLLECTION), nsmap=ns.NSMAP)
        if collection_id is not None:
            root.set("id", collection_id)
        return cls(etree.ElementTree(root))

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    def _index(self):
        for child in child_elements(self.root):
            name = local_name(child)
            if name == ns.DATA_STREAM:
                self.datastreams.append(DataStream.from_element(child))
            elif name in ns.COMPONENT_ELEMENTS:
                self._register_component(Component(element=child, id=child.get("id")))

    def _register_component(self, component: Component):
        self.components.append(component)
        if component.id is not None:
            self._components_by_id.setdefault(component.id, component)

    def location(self, element: etree._Element) -> Optional[SourceLocation]:
        return SourceLocation.of(element, self.filename)

    def datastream(self, datastream_id: Optional[str] = None) -> Optional[DataStream]:
        """The first data-stream with the given id, or the first one at all when id is None."""
        for datastream in self.datastreams:
            if datastream_id is None or datastream.id == datastream_id:
                return datastream
        return None

    def component(self, component_id: str) -> Optional[Component]:
        """First component with the given id, None when there is none."""
        return self._components_by_id.get(component_id)

    def datastream_ids(self) -> List[Optional[str]]:
        return [datastream.id for datastream in self.datastreams]

    def component_ids(self) -> List[Optional[str]]:
        return [component.id for component in self.components]

    def add_datastream(self, datastream_id: Optional[str] = None) -> DataStream:
        """Add a data-stream with its four empty containers, ahead of any component."""
        element = etree.Element(ns.ds(ns.DATA_STREAM))
        if datastream_id is not None:
            element.set("id", datastream_id)
        for name in ns.CONTAINERS:
            etree.SubElement(element, ns.ds(name))

        if self.components:
            self.components[0].element.addprevious(element)
        else:
            self.root.append(element)
        datastream = DataStream.from_element(element)
        self.datastreams.append(datastream)
        return datastream

    def add_component(self, component_id: str, content: etree._Element) -> Component:
        """Append a component holding a copy of ``content``."""
        element = etree.SubElement(self.root, ns.ds(ns.COMPONENT))
        element.set("id", component_id)
        element.append(copy.deepcopy(content))
        component = Component(element=element, id=component_id)
        self._register_component(component)
        return component

    def clone_component(self, component: Component) -> etree._ElementTree:
        """
        Copy a component's inner root into a standalone single-root document.

        Namespaces in scope at the inner root are declared on the copy's root;
        declarations that only served the collection around it are dropped.

        Raises:
            EmptyComponentError: If the component holds no element
        """
        inner_root = component.inner_root
        if inner_root is None:
            raise EmptyComponentError(component.id, location=self.location(component.element))

        clone = etree.Element(inner_root.tag, attrib=dict(inner_root.attrib), nsmap=inner_root.nsmap)
        clone.text = inner_root.text
        for child in inner_root:
            clone.append(copy.deepcopy(child))

        collection_ns = set(self.root.nsmap.items())
        keep = [prefix for prefix, uri in inner_root.nsmap.items()
                if prefix is not None and (prefix, uri) not in collection_ns]
        etree.cleanup_namespaces(clone, keep_ns_prefixes=keep)
        return etree.ElementTree(clone)

    def to_bytes(self, encoding: str = "utf-8", pretty_print: bool = False) -> bytes:
        return etree.tostring(self.tree, encoding=encoding, xml_declaration=True, pretty_print=pretty_print)

    def write(self, path: Union[str, "os.PathLike[str]"], encoding: str = "utf-8", pretty_print: bool = False):
        self.tree.write(os.fspath(path), encoding=encoding, xml_declaration=True, pretty_print=pretty_print)
