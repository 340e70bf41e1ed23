# utils/_timer.py
"""Context manager for timing reduction cycles and other blocks of code."""

__all__ = [
    "TimedBlock",
]

import os
import time
import logging


class TimedBlock:
    r"""Context manager that times a block of code and logs the result.

    Parameters
    ----------
    message : str
        Label of the block, printed on entry and logged on exit.

    Examples
    --------
    >>> import romsketch
    >>> strategy = romsketch.strategies.RandomizedSVD(1000, 20, 8, p=2)
    >>> strategy.solutions = snapshots
    >>> with romsketch.utils.TimedBlock("randomized SVD") as timer:
    ...     strategy.order_reduction()
    randomized SVD...done in 0.01 s.
    >>> timer.elapsed
    0.0064239501953125

    Send the timings to a file as well:

    >>> romsketch.utils.TimedBlock.add_logfile("reduction.log")
    Logging to '/path/to/current/folder/reduction.log'

    Set ``TimedBlock.verbose = False`` to log without printing.
    """

    verbose = True
    formatter = logging.Formatter(
        fmt="%(asctime)s  %(levelname)s:\t%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    def __init__(self, message: str = "Running code block"):
        self.message = message.rstrip()
        self.__elapsed = None

    @property
    def elapsed(self):
        """Wall-clock seconds spent in the block, ``None`` until it exits."""
        return self.__elapsed

    def __enter__(self):
        if self.verbose:
            print(f"{self.message}...", end="", flush=True)
        self._tic = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.__elapsed = time.perf_counter() - self._tic

        if exc_type is None:
            if self.verbose:
                print(f"done in {self.__elapsed:.2f} s.", flush=True)
            logging.info(f"{self.message}...done in {self.__elapsed:.6f} s.")
            return

        if self.verbose:
            print(f"{exc_type.__name__}: {exc_value}", flush=True)
        logging.error(
            f"{self.message}...({exc_type.__name__}) {exc_value} "
            f"after {self.__elapsed:.6f} s"
        )

    @classmethod
    def add_logfile(cls, logfile: str = "romsketch.log") -> None:
        """Also write :class:`TimedBlock` records to ``logfile``.

        Calling this twice with the same file does not duplicate records.
        """
        logger = logging.getLogger()
        logpath = os.path.abspath(logfile)
        for handler in logger.handlers:
            if (
                isinstance(handler, logging.FileHandler)
                and os.path.abspath(handler.baseFilename) == logpath
            ):
                return

        handler = logging.FileHandler(logpath, "a")
        handler.setFormatter(cls.formatter)
        handler.setLevel(logging.INFO)
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        if cls.verbose:
            print(f"Logging to '{logpath}'")
