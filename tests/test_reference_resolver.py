"""Tests for component and component-ref lookups."""
import io
import unittest

from scapds.components.reference_resolver import ReferenceResolver, find_component, find_component_ref
from scapds.core.errors import (
    ComponentNotFoundError,
    ComponentRefNotFoundError,
    InvalidReferenceError,
)
from scapds.model import Collection


collection_xml = b"""<ds:data-stream-collection xmlns:ds="http://scap.nist.gov/schema/scap/source/1.2"
    xmlns:xlink="http://www.w3.org/1999/xlink"
    xmlns:cat="urn:oasis:names:tc:entity:xmlns:xml:catalog">
  <ds:data-stream id="ds1">
    <ds:checklists>
      <ds:component-ref id="cref-xccdf" xlink:href="#comp-xccdf">
        <cat:catalog>
          <cat:uri name="oval.xml" uri="#cref-oval"/>
          <cat:uri uri="#cref-oval"/>
          <cat:uri name="no-uri.xml"/>
          <cat:uri name="short.xml" uri="#"/>
          <cat:uri name="dangling.xml" uri="#cref-missing"/>
        </cat:catalog>
      </ds:component-ref>
      <ds:component-ref xlink:href="#comp-xccdf"/>
      <ds:component-ref id="cref-no-href"/>
      <ds:component-ref id="cref-bad-href" xlink:href="comp-xccdf"/>
      <ds:component-ref id="cref-dangling" xlink:href="#comp-missing"/>
    </ds:checklists>
    <!-- refs in later containers are found too -->
    <ds:checks>
      <ds:component-ref id="cref-oval" xlink:href="#comp-oval"/>
    </ds:checks>
    <ds:extended-components>
      <ds:component-ref id="cref-oval" xlink:href="#comp-shadowed"/>
    </ds:extended-components>
  </ds:data-stream>
  <ds:data-stream id="ds2">
    <ds:checks>
      <ds:component-ref id="cref-other" xlink:href="#comp-oval"/>
    </ds:checks>
  </ds:data-stream>
  <ds:component id="comp-xccdf"><Benchmark/></ds:component>
  <ds:component id="comp-oval"><oval_definitions/></ds:component>
</ds:data-stream-collection>
"""


class FindTest(unittest.TestCase):
    """Module-level lookups."""

    def setUp(self):
        self.collection = Collection.parse(io.BytesIO(collection_xml))
        self.datastream = self.collection.datastream("ds1")

    def test_find_component(self):
        component = find_component(self.collection, "comp-oval")
        self.assertEqual(component.id, "comp-oval")

    def test_find_component_missing(self):
        with self.assertRaises(ComponentNotFoundError) as ctx:
            find_component(self.collection, "comp-missing")
        self.assertEqual(ctx.exception.component_id, "comp-missing")
        self.assertIn("comp-missing", str(ctx.exception))

    def test_find_component_ref_scans_all_containers(self):
        ref = find_component_ref(self.datastream, "cref-oval")
        self.assertEqual(ref.container, "checks")
        self.assertEqual(ref.href.identifier, "comp-oval")

    def test_find_component_ref_is_scoped_to_datastream(self):
        with self.assertRaises(ComponentRefNotFoundError) as ctx:
            find_component_ref(self.datastream, "cref-other")
        self.assertEqual(ctx.exception.ref_id, "cref-other")
        self.assertIsNotNone(find_component_ref(self.collection.datastream("ds2"), "cref-other"))


class ReferenceResolverTest(unittest.TestCase):
    """Validation and resolution of hrefs and catalog entries."""

    def setUp(self):
        self.collection = Collection.parse(io.BytesIO(collection_xml))
        self.datastream = self.collection.datastream("ds1")
        self.resolver = ReferenceResolver(self.collection)
        self.refs = self.datastream.checklists.refs

    def test_resolve_href(self):
        component = self.resolver.resolve_href(self.refs[0])
        self.assertEqual(component.id, "comp-xccdf")

    def test_missing_id(self):
        with self.assertRaises(InvalidReferenceError) as ctx:
            self.resolver.resolve_href(self.refs[1])
        self.assertEqual(ctx.exception.attribute, "id")
        self.assertIsNotNone(ctx.exception.location.line)

    def test_missing_href(self):
        with self.assertRaises(InvalidReferenceError) as ctx:
            self.resolver.resolve_href(self.refs[2])
        self.assertEqual(ctx.exception.attribute, "href")

    def test_href_without_marker(self):
        with self.assertRaises(InvalidReferenceError) as ctx:
            self.resolver.resolve_href(self.refs[3])
        self.assertEqual(ctx.exception.value, "comp-xccdf")

    def test_dangling_href(self):
        with self.assertRaises(ComponentNotFoundError):
            self.resolver.resolve_href(self.refs[4])

    def test_resolve_entry(self):
        entries = self.refs[0].catalog.entries
        ref = self.resolver.resolve_entry(self.datastream, entries[0])
        self.assertEqual(ref.id, "cref-oval")
        self.assertEqual(ref.href.identifier, "comp-oval")

    def test_entry_errors(self):
        entries = self.refs[0].catalog.entries
        expected = [
            (entries[1], InvalidReferenceError, "name"),
            (entries[2], InvalidReferenceError, "uri"),
            (entries[3], InvalidReferenceError, "uri"),
        ]
        for entry, error_class, attribute in expected:
            with self.assertRaises(error_class) as ctx:
                self.resolver.resolve_entry(self.datastream, entry)
            self.assertEqual(ctx.exception.attribute, attribute)

        with self.assertRaises(ComponentRefNotFoundError):
            self.resolver.resolve_entry(self.datastream, entries[4])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
