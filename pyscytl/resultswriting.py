"""
Supports writing results files.

"""

from contextlib import contextmanager
import logging
import re
import sys

try:
    import xlsxwriter
except ImportError:
    raise Exception("XlsxWriter does not seem to be installed. "
                    "Please follow the setup instructions.")

from pyscytl.utils import time_it


FILE_ENCODING = "utf-8"
WRITER_DELIMITER = ";"

# Excel limits worksheet names to 31 characters and forbids these.
MAX_SHEET_NAME_LENGTH = 31
SHEET_NAME_FORBIDDEN = re.compile(r"[\[\]:*?/\\]")

VOTER_COLUMN_NAMES = ("Registered Voters", "Ballots Cast", "Voter Turnout")

log = logging.getLogger(__name__)


def make_sheet_name(number, contest_name):
    name = "%d - %s" % (number, contest_name)
    name = SHEET_NAME_FORBIDDEN.sub("-", name)
    # Excel also forbids a trailing apostrophe.  The number prefix keeps
    # the name from starting with one.
    return name[:MAX_SHEET_NAME_LENGTH].rstrip("'")


class ResultsWriter(object):

    """
    Base class for writing a Ballot object to a file.

    Subclasses provide writer(), write_row() and write_contest_start().

    """

    name = None

    def __init__(self, path=None):
        self.path = path

    def write(self, ballot):
        with time_it("writing output file: %s" % self.name):
            with self.writer():
                self.write_properties(ballot.properties)
                self.write_toc(ballot.toc)
                self.write_regions(ballot.region_label, ballot.regions)
                self.write_contests(ballot.contests)

    def write_ln(self, s=""):
        self.write_row((s, ))

    def write_properties(self, properties):
        self.write_row(("Title", properties.title))
        self.write_row(("Author", properties.author))
        self.write_row(("Created", properties.created))

    def write_toc(self, toc):
        for entry in toc:
            self.write_row((entry.page, entry.title))

    def make_region_values(self, region):
        return (region.name, region.registered_voters, region.ballots_cast,
                "%.2f" % region.voter_turnout)

    def write_regions(self, region_label, regions):
        self.write_row((region_label, ) + VOTER_COLUMN_NAMES)
        for region in regions:
            self.write_row(self.make_region_values(region))

    def write_contests(self, contests):
        for number, contest in enumerate(contests, start=1):
            log.debug("writing contest: %s (%d rows)" % (contest.name, len(contest.rows)))
            self.write_contest_start(number, contest)
            self.write_row([header.label for header in contest.schema])
            for row in contest.rows:
                self.write_row((row.label, ) + row.values)


class TextWriter(ResultsWriter):

    """
    Writes the semicolon-delimited text report.

    When no path is given, the report is written to stdout.

    """

    name = "Text"

    @contextmanager
    def writer(self):
        if self.path is None:
            self.file = sys.stdout
            yield
            return
        with open(self.path, "w", encoding=FILE_ENCODING) as f:
            self.file = f
            yield

    def write_ln(self, s=""):
        print(s, file=self.file)

    def write_row(self, values):
        self.write_ln(WRITER_DELIMITER.join([str(v) for v in values]))

    def make_region_values(self, region):
        values = super().make_region_values(region)
        # Region lines are indented under the header line.
        return ("  %s" % values[0], ) + values[1:]

    def write_contest_start(self, number, contest):
        self.write_ln(contest.name)


class ExcelWriter(ResultsWriter):

    """
    Writes an Excel workbook with one worksheet per contest.

    The document properties and table of contents go on a "Summary"
    worksheet, and the regions on a "Registered Voters" worksheet.

    """

    name = "Excel"

    row_index = 0

    @contextmanager
    def writer(self):
        workbook = xlsxwriter.Workbook(self.path)
        self.workbook = workbook
        yield
        workbook.close()

    def start_worksheet(self, name):
        self.worksheet = self.workbook.add_worksheet(name)
        self.row_index = 0

    def write_row(self, values):
        self.worksheet.write_row(self.row_index, 0, values)
        self.row_index += 1

    def write_properties(self, properties):
        self.start_worksheet("Summary")
        super().write_properties(properties)
        self.write_ln()

    def make_region_values(self, region):
        return (region.name, region.registered_voters, region.ballots_cast,
                region.voter_turnout)

    def write_regions(self, region_label, regions):
        self.start_worksheet("Registered Voters")
        super().write_regions(region_label, regions)

    def write_contest_start(self, number, contest):
        self.start_worksheet(make_sheet_name(number, contest.name))
        self.write_ln(contest.name)
        self.write_ln()
