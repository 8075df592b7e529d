'''
Drawing level helpers: here we don't know in advance which record follows,
so we look at the type name and dispatch to the registered record class.
'''
import logging

from .chain import Chain, iter_linked
from .diagnostics import Diagnostic, DiagnosticKind, ReadResult, Report
from .core import skip_to_terminator
from .enum import Compliant
from .exceptions import EndOfStream
from .meta import REGISTRY


logger = logging.getLogger(__name__)

# type names that close a list of records, they are left to the caller
STOP_NAMES = ('ENDSEC', 'ENDTAB', 'ENDBLK', 'SEQEND', 'EOF')
# record type receiving the 999 lines found between records
COMMENT_NAME = 'COMMENT'


def lookup(name, registry=None):
    registry = REGISTRY if registry is None else registry
    return registry.get(name)


class RecordReader(object):
    '''Iterate over the records of a stream.

    Each step yields a ReadResult; the unknown type names are skipped with
    a diagnostic and the bare 999 lines become COMMENT records. The
    iteration stops at the end of the stream or at one of the stop names,
    whose tag is pushed back into the stream.'''

    def __init__(self, stream, registry=None, defaults=None, compliant=Compliant.NONE, stop=STOP_NAMES):
        self.stream = stream
        self.registry = REGISTRY if registry is None else registry
        self.defaults = defaults
        self.compliant = compliant
        self.stop = stop
        self.report = Report()

    def _next_tag(self):
        try:
            return self.stream.next_tag()
        except EndOfStream:
            return None

    def __iter__(self):
        tag = self._next_tag()

        while tag is not None:
            if tag.code == 999:
                cls = lookup(COMMENT_NAME, self.registry)
                if cls is None:
                    self.report.add(Diagnostic(
                        DiagnosticKind.COMMENT, tag.value, line=self.stream.line_number, code=tag.code))
                    tag = self._next_tag()
                    continue

                # a bare comment line, without type name
                record = cls.allocate(defaults=self.defaults, compliant=self.compliant)
                record.init()
                record.consume_tag(tag)

                tag = self._next_tag()

                yield ReadResult(record, tag, record.report)
                continue

            if tag.code != 0:
                self.report.add(Diagnostic(
                    DiagnosticKind.UNKNOWN_CODE,
                    f'type name expected, found code {tag.code}',
                    line=self.stream.line_number, code=tag.code))
                tag = skip_to_terminator(self.stream)
                continue

            if tag.value in self.stop:
                self.stream.push_back(tag)
                return

            cls = lookup(tag.value, self.registry)

            if cls is None:
                self.report.add(Diagnostic(
                    DiagnosticKind.UNKNOWN_RECORD,
                    f'record type \'{tag.value}\' not supported, skipped',
                    line=self.stream.line_number, code=0))
                tag = skip_to_terminator(self.stream)
                continue

            logger.debug('reading %s at line %d', tag.value, self.stream.line_number)

            result = cls.read(self.stream, defaults=self.defaults, compliant=self.compliant)

            yield result

            tag = result.terminator


def read_records(stream, registry=None, defaults=None, compliant=Compliant.NONE):
    '''Returns the list of ReadResult up to the end of the section.'''
    return list(RecordReader(stream, registry=registry, defaults=defaults, compliant=compliant))


def read_chain(stream, cls, defaults=None, compliant=Compliant.NONE):
    '''Read consecutive records of the same type, the first type name
    must be the next tag of the stream.

    The records are linked via "next" in the order they are read; the
    chain and the list of ReadResult are returned. The first tag not
    belonging to the sequence is pushed back into the stream.'''
    chain = Chain()
    results = []

    try:
        tag = stream.next_tag()
    except EndOfStream:
        return chain, results

    while tag is not None and tag.code == 0 and tag.value == cls.dxf_name:
        result = cls.read(stream, defaults=defaults, compliant=compliant)
        results.append(result)

        if result.ok:
            chain.push_back(result.record)

        tag = result.terminator

    if tag is not None:
        stream.push_back(tag)

    return chain, results


def write_chain(stream, records, version=None):
    '''Write a sequence of records, given as an iterable or as the head of
    linked records. A failed record doesn't stop the others.'''
    if hasattr(records, 'next') and not isinstance(records, Chain):
        records = iter_linked(records)

    return [record.write(stream, version=version) for record in records]
