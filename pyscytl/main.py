
import logging

from pyscytl.errors import ScytlError
from pyscytl.parser import read_ballot
from pyscytl.resultswriting import ExcelWriter, TextWriter
from pyscytl.utils import time_it


log = logging.getLogger("scytl")


def configure_log():
    level = logging.DEBUG
    fmt = "%(name)s: [%(levelname)s] %(message)s"
    logging.basicConfig(format=fmt, level=level)
    log.info("logging configured: level=%s" % logging.getLevelName(level))


def exit_with_error(msg):
    log.error(msg)
    exit(1)


def convert(export_path, output_base=None):
    """
    Read a Scytl export and write the reports.

    Without output_base the text report is written to stdout.  Otherwise,
    the text and Excel reports are written to "OUTPUT_BASE.txt" and
    "OUTPUT_BASE.xlsx", and the two paths are returned.

    """
    ballot = read_ballot(export_path)
    log.info("read: %r" % ballot)

    if output_base is None:
        TextWriter().write(ballot)
        return None

    text_path = "%s.txt" % output_base
    writer = TextWriter(path=text_path)
    writer.write(ballot)

    excel_path = "%s.xlsx" % output_base
    writer = ExcelWriter(path=excel_path)
    writer.write(ballot)

    return text_path, excel_path


def inner_main(docstr, argv):
    args = argv[1:]
    if len(args) not in (1, 2):
        err = "ERROR: incorrect number of arguments"
        exit_with_error("\n".join([err, docstr, err]))

    export_path = args[0]
    output_base = args[1] if len(args) > 1 else None
    try:
        convert(export_path, output_base)
    except ScytlError as err:
        log.error("error reading %s: %s" % (err.phase or "document", err))
        exit_with_error("error reading from <%s>" % export_path)


def main(docstr, argv):
    configure_log()
    with time_it("full program"):
        inner_main(docstr, argv)
