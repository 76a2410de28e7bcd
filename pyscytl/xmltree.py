"""
A small queryable view over an ElementTree document.

The readers only depend on the Node interface below (named children,
next sibling, attributes, text), so the markup parser underneath can
be swapped without touching any validation logic.

Names are written with the prefixes used by Scytl exports, e.g. "s:Row"
or "o:Title".  They are resolved through NAMESPACES, so a document that
binds the spreadsheet namespace to a different prefix (or as the default
namespace) reads the same.

"""

import logging
import re
from xml.etree import ElementTree as ET

from pyscytl.errors import CoercionError, DocumentLoadError


NAMESPACES = {
    "s": "urn:schemas-microsoft-com:office:spreadsheet",
    "o": "urn:schemas-microsoft-com:office:office",
    "x": "urn:schemas-microsoft-com:office:excel",
    "html": "http://www.w3.org/TR/REC-html40",
}

# Whole-string integer: no underscores, no trailing characters.
INTEGER_PATTERN = re.compile(r"\s*([+-]?\d+)\s*", re.ASCII)

log = logging.getLogger(__name__)


def qualify(name):
    """
    Convert a "prefix:local" name to ElementTree's "{uri}local" form.

    """
    prefix, sep, local = name.partition(":")
    if not sep:
        return name
    try:
        uri = NAMESPACES[prefix]
    except KeyError:
        raise ValueError("unknown namespace prefix: %r" % name)
    return "{%s}%s" % (uri, local)


def parse_int(text):
    """Parse text as a base-10 integer, rejecting partial parses."""
    if text is None:
        raise CoercionError(text, "integer")
    match = INTEGER_PATTERN.fullmatch(text)
    if match is None:
        raise CoercionError(text, "integer")
    return int(match.group(1))


class Node(object):

    """
    Wraps an ElementTree element together with its parent.

    ElementTree elements do not know their parent, so the parent is
    carried along to support next_sibling().

    """

    def __init__(self, element, parent=None):
        self.element = element
        self.parent = parent

    def __repr__(self):
        return "<Node object: %s>" % self.element.tag

    def __eq__(self, other):
        return isinstance(other, Node) and self.element is other.element

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return id(self.element)

    @property
    def name(self):
        return self.element.tag

    @property
    def attributes(self):
        return dict(self.element.attrib)

    @property
    def text(self):
        """
        Return the text content, or None if the element has none.

        An empty element (e.g. <s:Data s:Type="String"/>) has no text.

        """
        text = self.element.text
        return text if text else None

    def is_named(self, name):
        return self.element.tag == qualify(name)

    def children(self, name=None):
        """Return the child nodes in document order, optionally by name."""
        tag = None if name is None else qualify(name)
        return [Node(child, parent=self) for child in self.element
                if tag is None or child.tag == tag]

    def first_child(self, name):
        """Return the first child node with the given name, or None."""
        child = self.element.find(qualify(name))
        return None if child is None else Node(child, parent=self)

    def next_sibling(self):
        """Return the next element sibling, or None."""
        if self.parent is None:
            return None
        siblings = list(self.parent.element)
        for index, sibling in enumerate(siblings):
            if sibling is self.element:
                break
        else:
            return None
        index += 1
        if index >= len(siblings):
            return None
        return Node(siblings[index], parent=self.parent)

    def attribute(self, name, default=None):
        return self.element.get(qualify(name), default)

    def int_text(self):
        return parse_int(self.text)

    def int_attribute(self, name, default=0):
        """
        Return an attribute as an integer, or default if it is absent.

        """
        value = self.attribute(name)
        if value is None:
            return default
        return parse_int(value)


def parse_string(text):
    """Parse a document from a string and return its root Node."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as err:
        raise DocumentLoadError("document is not well formed: %s" % err)
    return Node(root)


def load_document(path):
    """
    Parse the file at the given path and return its root Node.

    """
    log.info("loading: %s" % path)
    try:
        tree = ET.parse(path)
    except OSError as err:
        raise DocumentLoadError("cannot read document: %s" % err, path=path)
    except ET.ParseError as err:
        raise DocumentLoadError("document is not well formed: %s" % err, path=path)
    return Node(tree.getroot())
