"""
The domain model produced by reading a Scytl export.

The whole model is built in one pass and handed to the results writers.
Sequences are stored as tuples so nothing changes after construction.

"""

from collections import namedtuple

from pyscytl.utils import EqualityMixin


# A table of contents entry, e.g. TocEntry(page=1, title="Registered Voters").
TocEntry = namedtuple("TocEntry", ("page", "title"))


class DocumentProperties(EqualityMixin):

    equality_attrs = ("title", "author", "created")

    def __init__(self, title, author, created):
        self.title = title
        self.author = author
        self.created = created

    def __repr__(self):
        return ("<DocumentProperties object: title=%r, author=%r, created=%r>" %
                (self.title, self.author, self.created))


def format_turnout(turnout):
    """Render a turnout percentage the way the export writes it."""
    return "%.2f %%" % turnout


class RegionProfile(EqualityMixin):

    """
    Registration and turnout figures for one voting region.

    A region is a county or precinct, depending on the export.

    """

    equality_attrs = ("name", "registered_voters", "ballots_cast", "voter_turnout")

    def __init__(self, name, registered_voters, ballots_cast, voter_turnout):
        self.name = name
        self.registered_voters = registered_voters
        self.ballots_cast = ballots_cast
        # A float percentage, e.g. 20.87 for "20.87 %".
        self.voter_turnout = voter_turnout

    @property
    def turnout_text(self):
        return format_turnout(self.voter_turnout)

    def __repr__(self):
        return ("<RegionProfile object: name=%r, registered=%d, cast=%d, turnout=%s>" %
                (self.name, self.registered_voters, self.ballots_cast, self.turnout_text))


class ColumnHeader(EqualityMixin):

    """
    One slot of a contest schema.

    The candidate name is empty for columns that do not belong to a
    candidate (e.g. "Registered Voters" or "Total").

    """

    equality_attrs = ("candidate_name", "column_name")

    def __init__(self, candidate_name, column_name):
        self.candidate_name = candidate_name
        self.column_name = column_name

    @property
    def label(self):
        if self.candidate_name:
            return "%s - %s" % (self.candidate_name, self.column_name)
        return self.column_name

    def __repr__(self):
        return "<ColumnHeader object: %r>" % self.label


class ResultRow(EqualityMixin):

    equality_attrs = ("label", "values")

    def __init__(self, label, values):
        self.label = label
        self.values = tuple(values)

    def __repr__(self):
        return "<ResultRow object: label=%r, %d values>" % (self.label, len(self.values))


class Contest(EqualityMixin):

    """
    The results of one contest.

    Attributes:

      name: the contest name, e.g. "U.S. President - DEM".
      schema: a tuple of ColumnHeader objects.  The first slot describes
        the row labels, so each row has len(schema) - 1 values.
      rows: a tuple of ResultRow objects, in document order.

    """

    equality_attrs = ("name", "schema", "rows")

    def __init__(self, name, schema, rows):
        self.name = name
        self.schema = tuple(schema)
        self.rows = tuple(rows)

    def __repr__(self):
        return ("<Contest object: name=%r, %d columns, %d rows>" %
                (self.name, len(self.schema), len(self.rows)))


class Ballot(EqualityMixin):

    """
    Everything read from one export file.

    Attributes:

      properties: a DocumentProperties object.
      toc: a tuple of TocEntry objects.
      region_label: the heading of the region column in the registered
        voters worksheet (e.g. "County" or "Precinct").
      regions: a tuple of RegionProfile objects.
      contests: a tuple of Contest objects.

    """

    equality_attrs = ("properties", "toc", "region_label", "regions", "contests")

    def __init__(self, properties, toc, region_label, regions, contests):
        self.properties = properties
        self.toc = tuple(toc)
        self.region_label = region_label
        self.regions = tuple(regions)
        self.contests = tuple(contests)

    def __repr__(self):
        return ("<Ballot object: %d toc entries, %d regions, %d contests>" %
                (len(self.toc), len(self.regions), len(self.contests)))
