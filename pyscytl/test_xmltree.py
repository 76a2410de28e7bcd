
import os
import tempfile
import unittest

from pyscytl.errors import CoercionError, DocumentLoadError
from pyscytl import xmltree
from pyscytl.xmltree import Node, parse_int, parse_string, qualify


SAMPLE = """\
<s:Workbook xmlns:s="urn:schemas-microsoft-com:office:spreadsheet"
            xmlns:o="urn:schemas-microsoft-com:office:office">
  <o:DocumentProperties>
    <o:Title>Sample</o:Title>
  </o:DocumentProperties>
  <s:Worksheet s:Name="First">
    <s:Table>
      <s:Row>
        <s:Cell s:MergeAcross="3"><s:Data s:Type="Number"> 42 </s:Data></s:Cell>
        <s:Cell><s:Data s:Type="String"/></s:Cell>
      </s:Row>
    </s:Table>
  </s:Worksheet>
  <s:Worksheet s:Name="Second"/>
</s:Workbook>
"""

# The same spreadsheet namespace bound as the default namespace.
DEFAULT_NAMESPACE_SAMPLE = """\
<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet"
          xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet">
  <Worksheet ss:Name="First"/>
</Workbook>
"""


class ModuleTest(unittest.TestCase):

    def test_qualify(self):
        self.assertEqual(qualify("s:Row"), "{urn:schemas-microsoft-com:office:spreadsheet}Row")
        self.assertEqual(qualify("o:Title"), "{urn:schemas-microsoft-com:office:office}Title")
        self.assertEqual(qualify("Row"), "Row")
        with self.assertRaises(ValueError):
            qualify("zz:Row")

    def test_parse_int(self):
        self.assertEqual(parse_int("9095"), 9095)
        self.assertEqual(parse_int(" -3 "), -3)
        self.assertEqual(parse_int("+7"), 7)

    def test_parse_int__partial(self):
        """Check that trailing characters are never truncated away."""
        for text in ("12abc", "1_000", "1.5", "٩٠٩٥", "", "abc", None):
            with self.subTest(text=text):
                with self.assertRaises(CoercionError):
                    parse_int(text)


class NodeTest(unittest.TestCase):

    def setUp(self):
        self.root = parse_string(SAMPLE)

    def test_children(self):
        worksheets = self.root.children("s:Worksheet")
        self.assertEqual([ws.attribute("s:Name") for ws in worksheets], ["First", "Second"])
        self.assertEqual(len(self.root.children()), 3)

    def test_first_child(self):
        props = self.root.first_child("o:DocumentProperties")
        self.assertEqual(props.first_child("o:Title").text, "Sample")
        self.assertIsNone(props.first_child("o:Author"))

    def test_next_sibling(self):
        first = self.root.first_child("s:Worksheet")
        second = first.next_sibling()
        self.assertEqual(second.attribute("s:Name"), "Second")
        self.assertIsNone(second.next_sibling())
        self.assertIsNone(self.root.next_sibling())

    def test_is_named(self):
        self.assertTrue(self.root.is_named("s:Workbook"))
        self.assertFalse(self.root.is_named("s:Worksheet"))

    def test_cells(self):
        row = self.root.first_child("s:Worksheet").first_child("s:Table").first_child("s:Row")
        number_cell, empty_cell = row.children("s:Cell")
        self.assertEqual(number_cell.int_attribute("s:MergeAcross"), 3)
        self.assertEqual(empty_cell.int_attribute("s:MergeAcross"), 0)
        self.assertEqual(number_cell.first_child("s:Data").int_text(), 42)
        self.assertIsNone(empty_cell.first_child("s:Data").text)

    def test_int_attribute__invalid(self):
        node = parse_string('<s:Cell xmlns:s="%s" s:MergeAcross="two"/>' % xmltree.NAMESPACES["s"])
        with self.assertRaises(CoercionError):
            node.int_attribute("s:MergeAcross")

    def test_default_namespace(self):
        root = parse_string(DEFAULT_NAMESPACE_SAMPLE)
        self.assertTrue(root.is_named("s:Workbook"))
        worksheet, = root.children("s:Worksheet")
        self.assertEqual(worksheet.attribute("s:Name"), "First")

    def test_equality(self):
        first = self.root.first_child("s:Worksheet")
        self.assertEqual(first, self.root.children("s:Worksheet")[0])
        self.assertNotEqual(first, first.next_sibling())
        self.assertIsInstance(first, Node)


class LoadDocumentTest(unittest.TestCase):

    def test_missing_file(self):
        with self.assertRaises(DocumentLoadError) as cm:
            xmltree.load_document("does-not-exist.xml")
        self.assertEqual(cm.exception.path, "does-not-exist.xml")

    def test_malformed(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "bad.xml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("<s:Workbook><unclosed>")
            with self.assertRaises(DocumentLoadError):
                xmltree.load_document(path)

    def test_parse_string__malformed(self):
        with self.assertRaises(DocumentLoadError):
            parse_string("<a><b></a>")


if __name__ == "__main__":
    unittest.main()
