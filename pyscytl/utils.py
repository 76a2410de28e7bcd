"""
Exposes utility functions.

"""

from contextlib import contextmanager
import logging
import timeit

from pyscytl.errors import ScytlError


_log = logging.getLogger("scytl")


class EqualityMixin:

    def __eq__(self, other):
        if type(self) != type(other):
            return False

        for name in self.equality_attrs:
            if getattr(self, name) != getattr(other, name):
                return False

        return True

    def __ne__(self, other):
        return not self.__eq__(other)


@contextmanager
def time_it(task_desc):
    """
    A context manager for timing chunks of code and logging it.

    Arguments:
      task_desc: task description for logging purposes

    """
    start_time = timeit.default_timer()
    _log.info("begin: %s..." % task_desc)
    yield
    elapsed = timeit.default_timer() - start_time
    _log.info("elapsed (%s): %.4f seconds" % (task_desc, elapsed))


@contextmanager
def reading_phase(phase, task_desc=None):
    """
    A context manager that times a reading phase and tags any ScytlError
    raised inside it with the phase name.

    Arguments:
      task_desc: the description to log, by default "reading <phase>".

    """
    if task_desc is None:
        task_desc = "reading %s" % phase
    with time_it(task_desc):
        try:
            yield
        except ScytlError as err:
            # Keep the innermost phase if one was already assigned.
            if err.phase is None:
                err.phase = phase
            raise
