"""Errors reported by the Persistence1D command line driver."""

#~ Exit status per error category. argparse exits with 2 on its own.
EXIT_STATUS = {
    "ok": 0,
    "runtime": 1,
    "usage": 2,
    "io": 3,
    "format": 4,
}


class Persistence1DError(Exception):
    """Base class for errors at the driver boundary. The engine itself does not raise these."""

    category = "runtime"

    def __init__(self, message, filename=None):
        super().__init__(message)
        self.message = message
        self.filename = filename

    @property
    def status_code(self):
        return EXIT_STATUS[self.category]

    def __str__(self):
        if self.filename is None:
            return self.message
        return "%s: %s" % (self.filename, self.message)


class DataFileError(Persistence1DError):
    """The input file cannot be read or the result file cannot be written."""

    category = "io"


class DataFormatError(Persistence1DError):
    """The input file does not hold one finite number per line."""

    category = "format"
