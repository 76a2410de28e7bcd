"""
Readers for the worksheets of a Scytl XML spreadsheet export.

The export is a single XML Spreadsheet 2003 workbook laid out as follows:

  * a DocumentProperties node with the report title, author and date,
  * a "Table of Contents" worksheet listing the page of each contest,
  * a "Registered Voters" worksheet with one row per region,
  * one worksheet per contest.

When reading, we also validate each worksheet against the one layout we
know about.  Any deviation raises a ScytlError instead of being skipped,
with the exception of decorative rows in the table of contents.

"""

import logging
import re

from pyscytl.errors import (ColumnCountMismatch, CoercionError, MissingField,
                            SchemaLengthMismatch, StructureError, TypeMismatch,
                            UnrecognizedColumn, WorksheetNotFound)
from pyscytl.models import (Ballot, ColumnHeader, Contest, DocumentProperties,
                            RegionProfile, ResultRow, TocEntry)
from pyscytl.utils import reading_phase
from pyscytl import xmltree


ROOT_NAME = "s:Workbook"
PROPERTIES_NAME = "o:DocumentProperties"

TOC_WORKSHEET_NAME = "Table of Contents"
VOTERS_WORKSHEET_NAME = "Registered Voters"

PAGE_STYLE = "Page"
VOTE_COUNT_STYLE = "VoteCount"
HEADER_STYLE = "headerLbl"

NUMBER_TYPE = "Number"
STRING_TYPE = "String"

REGISTERED_VOTERS_COLUMN = "Registered Voters"
BALLOTS_CAST_COLUMN = "Ballots Cast"
VOTER_TURNOUT_COLUMN = "Voter Turnout"

# Turnout values look like "20.87 %".  This many trailing characters are
# stripped before parsing, whatever they are.
TURNOUT_SUFFIX_LENGTH = 2

# The number must consume the whole string (leading whitespace is allowed).
FLOAT_PATTERN = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

PHASE_DOCUMENT = "document"
PHASE_PROPERTIES = "document properties"
PHASE_TOC = "table of contents"
PHASE_VOTERS = "registered voters"
PHASE_RESULTS = "election results"

log = logging.getLogger(__name__)


def parse_turnout(text):
    """
    Parse a turnout string like "20.87 %" and return a float.

    """
    if text is None:
        raise CoercionError(text, "percentage")
    number = text[:-TURNOUT_SUFFIX_LENGTH] if len(text) >= TURNOUT_SUFFIX_LENGTH else ""
    if FLOAT_PATTERN.fullmatch(number) is None:
        raise CoercionError(text, "percentage")
    return float(number)


def get_data(cell):
    """Return the s:Data node of a cell, or None."""
    return cell.first_child("s:Data")


def get_data_type(data):
    return None if data is None else data.attribute("s:Type")


def get_style(cell):
    return cell.attribute("s:StyleID")


def check_cell(cell, data_type, style=None, desc="cell"):
    """
    Check a cell's style and data type, and return its data node.

    Arguments:
      style: the required s:StyleID, or None to skip the style check.

    """
    if style is not None:
        actual_style = get_style(cell)
        if actual_style != style:
            raise TypeMismatch("unexpected style for %s" % desc,
                               expected=style, actual=actual_style)
    data = get_data(cell)
    actual_type = get_data_type(data)
    if actual_type != data_type:
        raise TypeMismatch("unexpected data type for %s" % desc,
                           expected=data_type, actual=actual_type)
    return data


def read_string_cell(cell, desc, style=None):
    """Return the text of a cell holding a required String."""
    data = check_cell(cell, STRING_TYPE, style=style, desc=desc)
    text = data.text
    if text is None:
        raise MissingField(desc)
    return text


def read_number_cell(cell, desc, style=VOTE_COUNT_STYLE):
    data = check_cell(cell, NUMBER_TYPE, style=style, desc=desc)
    return data.int_text()


def get_merge_span(cell):
    """
    Return how many schema columns a cell occupies.

    s:MergeAcross="N" means the cell covers N + 1 columns.

    """
    merge_across = cell.int_attribute("s:MergeAcross", default=0)
    if merge_across < 0:
        raise CoercionError(cell.attribute("s:MergeAcross"), "non-negative merge span")
    return merge_across + 1


def get_rows(worksheet):
    table = worksheet.first_child("s:Table")
    if table is None:
        raise StructureError("worksheet has no table",
                             worksheet=worksheet.attribute("s:Name"))
    return table.children("s:Row")


def get_cells(row):
    return row.children("s:Cell")


def find_worksheet(worksheets, name, start=0):
    """
    Return the index of the first worksheet with the given name.

    The scan starts at index start and does not wrap around, so callers
    can resume a scan from the position of an earlier match.

    Arguments:
      worksheets: a list of s:Worksheet nodes in document order.

    """
    for index in range(start, len(worksheets)):
        if worksheets[index].attribute("s:Name") == name:
            log.debug("found worksheet %r at index %d" % (name, index))
            return index
    raise WorksheetNotFound(name)


def read_document_properties(node):
    """
    Read the o:DocumentProperties node, and return a DocumentProperties.

    """
    if node is None:
        raise StructureError("missing document properties", name=PROPERTIES_NAME)
    values = []
    for name in ("o:Title", "o:Author", "o:Created"):
        field = node.first_child(name)
        text = None if field is None else field.text
        if text is None:
            raise MissingField(name)
        values.append(text)
    return DocumentProperties(*values)


def read_toc_row(row):
    """
    Return a TocEntry for a table of contents row, or None to skip it.

    The entries we're interested in have exactly two cells, e.g.--

      <s:Row>
        <s:Cell s:StyleID="Page">
          <s:Data s:Type="Number">1</s:Data>
        </s:Cell>
        <s:Cell>
          <s:Data s:Type="String">Registered Voters</s:Data>
        </s:Cell>
      </s:Row>

    Anything else is decoration and is ignored.

    """
    cells = get_cells(row)
    if len(cells) != 2:
        return None
    page_cell, title_cell = cells
    if get_style(page_cell) != PAGE_STYLE:
        return None

    page_data, title_data = get_data(page_cell), get_data(title_cell)
    if get_data_type(page_data) != NUMBER_TYPE or get_data_type(title_data) != STRING_TYPE:
        return None
    try:
        page = page_data.int_text()
    except CoercionError:
        return None
    title = title_data.text
    if title is None:
        return None

    return TocEntry(page, title)


def read_toc_worksheet(worksheet):
    """
    Read the "Table of Contents" worksheet, and return a list of TocEntry.

    """
    toc = []
    for row in get_rows(worksheet):
        entry = read_toc_row(row)
        if entry is None:
            log.debug("skipping table of contents row")
            continue
        toc.append(entry)
    log.info("parsed: %d table of contents entries" % len(toc))
    return toc


def read_voters_header(row):
    """
    Return the list of column names in the registered voters header row.

    For example: ["County", "Registered Voters", "Ballots Cast", "Voter Turnout"].

    """
    header = []
    for cell in get_cells(row):
        data = get_data(cell)
        if get_data_type(data) == STRING_TYPE:
            header.append(data.text or "")
    return header


def read_region_row(row, header):
    """
    Read one row of the registered voters worksheet, and return a
    RegionProfile.  A sample row:

      Arkansas | 9095 | 1898 | "20.87 %"

    where the last three cells have style VoteCount.  We use the header
    name, the cell style, and the data type to make sure we're reading
    from the correct column.

    """
    cells = get_cells(row)
    if not cells:
        raise MissingField("region name")
    name = read_string_cell(cells[0], "region name")

    # The first header entry labels the region column.  It is not
    # checked since it differs between county and precinct level files.
    column_names = header[1:]
    value_cells = cells[1:]

    values = {}
    for cell, column_name in zip(value_cells, column_names):
        desc = "%s (%s)" % (column_name, name)
        if column_name in (REGISTERED_VOTERS_COLUMN, BALLOTS_CAST_COLUMN):
            values[column_name] = read_number_cell(cell, desc)
        elif column_name == VOTER_TURNOUT_COLUMN:
            data = check_cell(cell, STRING_TYPE, style=VOTE_COUNT_STYLE, desc=desc)
            values[column_name] = parse_turnout(data.text)
        else:
            raise UnrecognizedColumn(column_name)

    # Make sure we have the same number of headers and columns.
    if len(value_cells) != len(column_names):
        raise ColumnCountMismatch("row length does not match header", region=name,
                                  expected=len(column_names), actual=len(value_cells))

    for column_name in (REGISTERED_VOTERS_COLUMN, BALLOTS_CAST_COLUMN, VOTER_TURNOUT_COLUMN):
        if column_name not in values:
            raise MissingField(column_name)

    return RegionProfile(name=name,
                         registered_voters=values[REGISTERED_VOTERS_COLUMN],
                         ballots_cast=values[BALLOTS_CAST_COLUMN],
                         voter_turnout=values[VOTER_TURNOUT_COLUMN])


def read_registered_voters_worksheet(worksheet):
    """
    Read the "Registered Voters" worksheet.

    Returns a 2-tuple (region_label, regions), where region_label is
    the first header entry (e.g. "County") and regions is a list of
    RegionProfile objects in document order.

    """
    rows = get_rows(worksheet)
    if not rows:
        log.info("parsed: 0 regions")
        return "", []

    header = read_voters_header(rows[0])
    log.debug("registered voters header: %r" % header)
    region_label = header[0] if header else ""

    regions = [read_region_row(row, header) for row in rows[1:]]
    log.info("parsed: %d regions" % len(regions))
    return region_label, regions


class ContestReader(object):

    """
    Reads one election results worksheet.

    The worksheet begins with three header rows, e.g.--

      | U.S. President - DEM (s:MergeAcross="6", s:StyleID="headerLbl")   |
      |        |            | John Wolfe (2)     | Barack Obama (2)  |       |
      | County | Registered | Election | Total   | Election | Total  | Total |

    The first gives the contest name and the number of columns, the
    second gives the candidate for each column (possibly spanning several
    columns), and the third gives the column names.  The remaining rows
    hold vote counts, one row per region.

    """

    def __init__(self, worksheet):
        self.worksheet = worksheet
        self.name = None
        self.width = 0
        self.candidate_names = []
        self.column_names = []

    def next_row(self, rows, desc):
        try:
            return next(rows)
        except StopIteration:
            raise StructureError("missing %s row" % desc,
                                 worksheet=self.worksheet.attribute("s:Name"))

    def read_title_row(self, row):
        cells = get_cells(row)
        if len(cells) != 1:
            raise ColumnCountMismatch("title row must have exactly one cell",
                                      expected=1, actual=len(cells))
        cell = cells[0]
        self.name = read_string_cell(cell, "contest name", style=HEADER_STYLE)
        self.width = get_merge_span(cell)

    def read_candidate_row(self, row):
        candidate_names = []
        for cell in get_cells(row):
            span = get_merge_span(cell)
            if len(candidate_names) + span > self.width:
                raise SchemaLengthMismatch("candidate row is wider than the contest",
                                           expected=self.width,
                                           actual=len(candidate_names) + span)
            data = get_data(cell)
            candidate_name = (None if data is None else data.text) or ""
            candidate_names.extend([candidate_name] * span)

        if len(candidate_names) != self.width:
            raise SchemaLengthMismatch("candidate row is narrower than the contest",
                                       expected=self.width, actual=len(candidate_names))
        self.candidate_names = candidate_names

    def read_column_row(self, row):
        cells = get_cells(row)
        if len(cells) != self.width:
            raise SchemaLengthMismatch("column name row does not match the contest",
                                       expected=self.width, actual=len(cells))
        self.column_names = [read_string_cell(cell, "column name") for cell in cells]

    def read_result_row(self, row):
        cells = get_cells(row)
        if not cells:
            raise MissingField("row label")
        label = read_string_cell(cells[0], "row label")
        values = [read_number_cell(cell, "vote count (%s)" % label) for cell in cells[1:]]
        if len(values) + 1 != self.width:
            raise ColumnCountMismatch("row length does not match the contest", label=label,
                                      expected=self.width - 1, actual=len(values))
        return ResultRow(label, values)

    def read(self):
        rows = iter(get_rows(self.worksheet))
        self.read_title_row(self.next_row(rows, "contest title"))
        self.read_candidate_row(self.next_row(rows, "candidate name"))
        self.read_column_row(self.next_row(rows, "column name"))
        results = [self.read_result_row(row) for row in rows]

        schema = [ColumnHeader(candidate_name, column_name) for candidate_name, column_name
                  in zip(self.candidate_names, self.column_names)]
        contest = Contest(self.name, schema, results)
        log.debug("parsed contest: %s (%d columns, %d rows)" %
                  (contest.name, len(contest.schema), len(contest.rows)))
        return contest


def read_election_results_worksheet(worksheet):
    """
    Read a worksheet of contest results, and return a Contest object.

    """
    return ContestReader(worksheet).read()


def read_workbook(root):
    """
    Read a parsed workbook, and return a Ballot object.

    Arguments:
      root: the root Node of the document.

    """
    with reading_phase(PHASE_DOCUMENT):
        if not root.is_named(ROOT_NAME):
            raise StructureError("missing root node", name=ROOT_NAME, actual=root.name)
        worksheets = root.children("s:Worksheet")
        log.info("found: %d worksheets" % len(worksheets))

    with reading_phase(PHASE_PROPERTIES):
        properties = read_document_properties(root.first_child(PROPERTIES_NAME))

    with reading_phase(PHASE_TOC):
        toc_index = find_worksheet(worksheets, TOC_WORKSHEET_NAME)
        toc = read_toc_worksheet(worksheets[toc_index])

    with reading_phase(PHASE_VOTERS):
        # Resume the scan from the table of contents.
        voters_index = find_worksheet(worksheets, VOTERS_WORKSHEET_NAME, start=toc_index)
        region_label, regions = read_registered_voters_worksheet(worksheets[voters_index])

    with reading_phase(PHASE_RESULTS):
        contests = []
        for worksheet in worksheets[voters_index + 1:]:
            contests.append(read_election_results_worksheet(worksheet))
        log.info("parsed: %d contests" % len(contests))

    return Ballot(properties=properties, toc=toc, region_label=region_label,
                  regions=regions, contests=contests)


def read_ballot(path):
    """
    Read the Scytl export at the given path, and return a Ballot object.

    Raises a ScytlError (tagged with the failing phase) on any failure.

    """
    with reading_phase(PHASE_DOCUMENT, task_desc="loading document"):
        root = xmltree.load_document(path)
    return read_workbook(root)
