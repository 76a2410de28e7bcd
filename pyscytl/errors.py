"""
Exceptions raised while reading a Scytl export.

Every reading failure is fatal for the current read, so none of these
are meant to be caught and recovered from inside the readers.  The
orchestrator tags each error with the phase it was raised in.

"""


class ScytlError(Exception):

    """
    Base class for all reading errors.

    Attributes:

      message: human-readable error message.
      details: a dict of extra information for diagnostics.
      phase: the reading phase (e.g. "registered voters") or None if the
        error was raised outside the orchestrator.

    """

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details
        self.phase = None

    def __str__(self):
        if self.details:
            info = ", ".join("%s=%r" % item for item in sorted(self.details.items()))
            return "%s (%s)" % (self.message, info)
        return self.message


class DocumentLoadError(ScytlError):

    """The file is missing, unreadable, or not well-formed markup."""

    def __init__(self, message, path=None):
        super().__init__(message, path=path)
        self.path = path


class StructureError(ScytlError):

    """A required node (root, worksheet, table, header row) is absent."""


class WorksheetNotFound(StructureError):

    def __init__(self, name):
        super().__init__("worksheet not found", name=name)
        self.name = name


class MissingField(ScytlError):

    def __init__(self, field_name):
        super().__init__("missing required field", field=field_name)
        self.field_name = field_name


class TypeMismatch(ScytlError):

    """A cell's data type or style is not the one its position requires."""

    def __init__(self, message, expected=None, actual=None):
        super().__init__(message, expected=expected, actual=actual)
        self.expected = expected
        self.actual = actual


class CoercionError(TypeMismatch):

    """
    Text is present but does not parse fully as the required number.

    Partial parses (e.g. "12abc") are always rejected.

    """

    def __init__(self, text, target):
        super().__init__("cannot convert text to %s" % target, expected=target, actual=text)
        self.text = text
        self.target = target


class ColumnCountMismatch(ScytlError):

    def __init__(self, message, expected, actual, **details):
        super().__init__(message, expected=expected, actual=actual, **details)
        self.expected = expected
        self.actual = actual


class SchemaLengthMismatch(ScytlError):

    def __init__(self, message, expected, actual, **details):
        super().__init__(message, expected=expected, actual=actual, **details)
        self.expected = expected
        self.actual = actual


class UnrecognizedColumn(ScytlError):

    def __init__(self, name):
        super().__init__("unrecognized column name", name=name)
        self.name = name
