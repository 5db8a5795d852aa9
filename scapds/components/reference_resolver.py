"""
Reference Resolver for scapds
Resolves component-ref hrefs to components and catalog uris to component-refs.
"""
from __future__ import annotations
from typing import Optional
from scapds.core.logging import get_logger
from scapds.core.errors import (
    ComponentNotFoundError,
    ComponentRefNotFoundError,
    InvalidReferenceError,
    SourceLocation,
)
from scapds.model.collection import CatalogEntry, Collection, Component, ComponentRef, DataStream

_logger = get_logger("scapds.resolve")


def find_component(collection: Collection, component_id: str,
                   location: Optional[SourceLocation] = None) -> Component:
    """
    First component of the collection with the given id.
    Raises:
        ComponentNotFoundError: If no component has that id
    """
    _logger.resolve("Looking up component", component_id=component_id)
    component = collection.component(component_id)
    if component is None:
        raise ComponentNotFoundError(component_id, location=location)
    return component


def find_component_ref(datastream: DataStream, ref_id: str,
                       location: Optional[SourceLocation] = None) -> ComponentRef:
    """
    First component-ref with the given id across all containers of the data-stream.
    Raises:
        ComponentRefNotFoundError: If no component-ref has that id
    """
    _logger.resolve("Looking up component-ref", ref_id=ref_id, datastream=datastream.id)
    ref = datastream.component_ref(ref_id)
    if ref is None:
        raise ComponentRefNotFoundError(ref_id, location=location)
    return ref


class ReferenceResolver:
    """
    Validates references of one collection and follows them to their targets.
    Usage:
        resolver = ReferenceResolver(collection)
        component = resolver.resolve_href(ref)
        nested_ref = resolver.resolve_entry(datastream, entry)
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def check_component_ref(self, ref: ComponentRef):
        """
        Require an id and a ``#<component-id>`` href on a component-ref.
        Raises:
            InvalidReferenceError: If either is missing or malformed
        """
        location = self.collection.location(ref.element)
        if not ref.id:
            raise InvalidReferenceError(
                "No or invalid id attribute on given component-ref.",
                attribute="id",
                value=ref.id,
                location=location,
            )
        if ref.href is None:
            raise InvalidReferenceError(
                "No or invalid xlink:href attribute on given component-ref.",
                attribute="href",
                value=ref.raw_href,
                location=location,
            )

    def resolve_href(self, ref: ComponentRef) -> Component:
        """
        The component a component-ref points at.
        Raises:
            InvalidReferenceError: If the component-ref is malformed
            ComponentNotFoundError: If the href names no component
        """
        self.check_component_ref(ref)
        return find_component(
            self.collection,
            ref.href.identifier,
            location=self.collection.location(ref.element),
        )

    def resolve_entry(self, datastream: DataStream, entry: CatalogEntry) -> ComponentRef:
        """
        The component-ref a catalog entry points at, within the same data-stream.
        Raises:
            InvalidReferenceError: If the entry lacks a name or a usable uri
            ComponentRefNotFoundError: If the uri names no component-ref
        """
        location = self.collection.location(entry.element)
        if not entry.name:
            raise InvalidReferenceError(
                "No or invalid name for a component referenced in the catalog. Skipping...",
                attribute="name",
                value=entry.name,
                location=location,
            )
        if entry.uri is None:
            raise InvalidReferenceError(
                "No or invalid URI for a component referenced in the catalog. Skipping...",
                attribute="uri",
                value=entry.raw_uri,
                location=location,
            )
        return find_component_ref(datastream, entry.uri.identifier, location=location)
