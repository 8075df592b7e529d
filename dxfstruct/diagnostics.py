'''
Structured channel for the problems found while decoding/encoding.

Nothing recoverable is printed: every issue becomes a Diagnostic collected
into the Report of the operation (and logged), the caller decides what to do.
'''
import logging
from enum import Enum, auto

from .enum import Compliant
from .exceptions import (
    DecodeException,
    UnknownCodeException,
    VersionException,
    MarkerException,
)


logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    MALFORMED_VALUE     = auto()
    UNKNOWN_CODE        = auto()
    DUPLICATE_CODE      = auto()
    VERSION_MISMATCH    = auto()
    BAD_MARKER          = auto()
    UNBALANCED_BRACKET  = auto()
    DEFAULT_SUBSTITUTED = auto()
    COMMENT             = auto()
    UNKNOWN_RECORD      = auto()
    TRUNCATED           = auto()
    FAILED              = auto()


LEVELS = {
    DiagnosticKind.DEFAULT_SUBSTITUTED: logging.INFO,
    DiagnosticKind.COMMENT: logging.INFO,
    DiagnosticKind.FAILED: logging.ERROR,
}

# which flag turns the diagnostic into an exception
COMPLIANCE = {
    DiagnosticKind.MALFORMED_VALUE: (Compliant.VALUE, DecodeException),
    DiagnosticKind.UNKNOWN_CODE: (Compliant.UNKNOWN, UnknownCodeException),
    DiagnosticKind.DUPLICATE_CODE: (Compliant.UNKNOWN, UnknownCodeException),
    DiagnosticKind.VERSION_MISMATCH: (Compliant.VERSION, VersionException),
    DiagnosticKind.BAD_MARKER: (Compliant.MARKER, MarkerException),
}


class Diagnostic(object):

    def __init__(self, kind, message, line=None, code=None, chain=None):
        self.kind = kind
        self.message = message
        self.line = line
        self.code = code
        self.chain = chain or []

    @property
    def level(self):
        return LEVELS.get(self.kind, logging.WARNING)

    def __repr__(self):
        return '<%s(%s, %r, line=%s, code=%s)>' % (
            self.__class__.__name__,
            self.kind.name,
            self.message,
            self.line,
            self.code,
        )

    def __str__(self):
        where = '.'.join(self.chain)
        line = f' at line {self.line}' if self.line is not None else ''
        return f'[{self.kind.name}] {where}: {self.message}{line}'


class Report(object):
    '''The list of diagnostics of a single operation.'''

    def __init__(self):
        self.diagnostics = []

    def __iter__(self):
        return iter(self.diagnostics)

    def __len__(self):
        return len(self.diagnostics)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.diagnostics)

    def add(self, diagnostic):
        logger.log(diagnostic.level, '%s', diagnostic)
        self.diagnostics.append(diagnostic)

        return diagnostic

    def extend(self, report):
        self.diagnostics.extend(report)

    def kinds(self):
        return [_.kind for _ in self.diagnostics]

    def of_kind(self, kind):
        return [_ for _ in self.diagnostics if _.kind == kind]

    @property
    def warnings(self):
        return [_ for _ in self.diagnostics if _.level >= logging.WARNING]


class ReadResult(object):
    '''Outcome of the decoding of one record.

    "terminator" is the 0-code tag that ended the record: it announces the
    next one and it's already consumed from the stream.'''

    def __init__(self, record, terminator, report, ok=True, error=None):
        self.record = record
        self.terminator = terminator
        self.report = report
        self.ok = ok
        self.error = error

    def __bool__(self):
        return self.ok

    def __repr__(self):
        return '<%s(ok=%s, record=%r, terminator=%r)>' % (
            self.__class__.__name__, self.ok, self.record, self.terminator)


class WriteResult(object):

    def __init__(self, record, report, ok=True, error=None):
        self.record = record
        self.report = report
        self.ok = ok
        self.error = error

    def __bool__(self):
        return self.ok

    def __repr__(self):
        return '<%s(ok=%s, record=%r, error=%r)>' % (
            self.__class__.__name__, self.ok, self.record, self.error)
