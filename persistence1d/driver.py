"""
Runs Persistence1D on data in a text file.

Command line: persistence1d <filename> [threshold] [-MATLAB]

 - filename is the path to a data text file with one float-compatible value per line.
 - threshold (optional) keeps only pairs with persistence larger than this value. Must be >= 0.
 - -MATLAB (optional) makes the written indices 1-based.

Writes the indices of the paired extrema to <filename without extension>_res.txt,
two lines per pair: the index of the minimum, then the index of the maximum.
Pairs are written from least to most persistent.
The global minimum is not paired and is not written to the file.
An existing result file is overwritten.
"""

import argparse
import logging
import os
import sys
import warnings

import numpy as np

from .errors import EXIT_STATUS, DataFileError, DataFormatError, Persistence1DError
from .persistence1d import NO_FILTERING, Persistence1D

logger = logging.getLogger(__name__)

RESULT_SUFFIX = "_res.txt"
MATLAB_FLAGS = ("-MATLAB", "-Matlab", "-matlab", "--matlab")


def _FindBadLine(Filename):
    """Returns (line number, text, reason) for the first line that is not a finite number. Blank and comment lines are skipped."""
    with open(Filename) as f:
        for LineNumber, Line in enumerate(f, 1):
            Text = Line.split("#", 1)[0].strip()
            if not Text:
                continue
            try:
                Value = float(Text)
            except ValueError:
                return (LineNumber, Text, "is not a number")
            if not np.isfinite(Value):
                return (LineNumber, Text, "is not a finite number")
    return None


def LoadData(Filename):
    #~ Input Data comes from a file. In our case, it is a list of numbers (floats) with one number per line.
    try:
        with warnings.catch_warnings():
            #~ numpy warns about empty files, which are valid input
            warnings.simplefilter("ignore", UserWarning)
            InputData = np.genfromtxt(Filename, dtype=np.float64)
    except OSError as e:
        raise DataFileError("cannot open file for reading (%s)" % (e.strerror or e), Filename) from e
    except ValueError as e:
        raise DataFormatError("expected one number per line (%s)" % e, Filename) from e

    if (InputData.ndim > 1):
        raise DataFormatError("expected one number per line, found %d columns" % InputData.shape[1], Filename)
    InputData = np.atleast_1d(InputData)

    #~ genfromtxt turns unreadable values into NaN, so go back to the file to name the line
    if not np.all(np.isfinite(InputData)):
        BadLine = _FindBadLine(Filename)
        if BadLine is None:
            raise DataFormatError("found a value that is not a finite number", Filename)
        raise DataFormatError("line %d: %r %s" % BadLine, Filename)

    return InputData


def ResultFilename(Filename):
    return os.path.splitext(Filename)[0] + RESULT_SUFFIX


def WriteMinMaxPairsToFile(Filename, Pairs):
    """Writes the minimum and maximum index of each pair on separate lines. No pairs give an empty file."""
    try:
        with open(Filename, "w") as f:
            for P in Pairs:
                f.write("%d\n%d\n" % (P.MinIndex, P.MaxIndex))
    except OSError as e:
        raise DataFileError("cannot open file for writing (%s)" % (e.strerror or e), Filename) from e


def _NonNegativeFloat(strValue):
    try:
        Value = float(strValue)
    except ValueError:
        raise argparse.ArgumentTypeError("cannot convert threshold value %r to a number" % strValue)
    if not (Value >= 0):
        raise argparse.ArgumentTypeError("threshold value should be >= 0, got %r" % strValue)
    return Value


def BuildParser():
    parser = argparse.ArgumentParser(
        prog="persistence1d",
        description="Finds extrema in one-dimensional data and pairs them by persistence.",
    )
    parser.add_argument("filename", help="Data file with one number per line")
    parser.add_argument("threshold", nargs="?", default=NO_FILTERING, type=_NonNegativeFloat,
                        help="Only write pairs with persistence larger than this value (default: all pairs)")
    parser.add_argument(*MATLAB_FLAGS, dest="matlab", action="store_true",
                        help="Write 1-based indices (Matlab convention)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug messages")
    return parser


def main(argv=None):
    #~ The threshold and the Matlab flag may come in any order after the filename
    args = BuildParser().parse_intermixed_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    try:
        InputData = LoadData(args.filename)

        P = Persistence1D()
        P.RunPersistence(InputData)
        if not P.VerifyResults():
            logger.error("Results for %s are inconsistent.", args.filename)
            return EXIT_STATUS["runtime"]

        OutFilename = ResultFilename(args.filename)
        WriteMinMaxPairsToFile(OutFilename, P.GetPairedExtrema(args.threshold, args.matlab))
    except Persistence1DError as e:
        logger.error("%s", e)
        return e.status_code

    logger.info("Saved results as %s", OutFilename)
    return EXIT_STATUS["ok"]


if __name__ == "__main__":
    sys.exit(main())
