"""
Usage: scytl-convert SCYTL.xml [OUTPUT_BASE]

Parses the given Scytl export file and writes a report.

The report is semicolon-delimited, beginning with the document properties
and the table of contents, followed by the registered voters table and
then one block per contest.

Arguments:

  SCYTL.xml: path to an XML spreadsheet export from the Scytl election
    results site.  The export contains a table of contents, a
    "Registered Voters" worksheet, and one worksheet per contest.

  OUTPUT_BASE: optional output path base.  If given, the file extensions
    are appended to the argument provided, so the output paths will have
    the form "OUTPUT_BASE.txt" and "OUTPUT_BASE.xlsx".  Otherwise, the
    text report is written to stdout.

In the above, relative paths will be interpreted as relative to the
current working directory.
"""

import sys

import pyscytl.main


def main():
    """
    The main console_script setup.py entry point.
    """
    pyscytl.main.main(__doc__, sys.argv)
