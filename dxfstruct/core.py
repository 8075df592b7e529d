"""
Core module for the abstraction of a tagged record.

A Record is described by its Field Table, i.e. the ordered list of fields
declared as class attributes: the same table drives the decoding (tags are
dispatched to the fields by group code) and the encoding (fields are written
in table order, each one deciding if it has to appear).
"""
import copy
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .enum import Compliant, DxfVersion
from .meta import MetaRecord
from .config import DEFAULTS
from .streams import TagStream, Tag
from .diagnostics import (
    COMPLIANCE,
    Diagnostic,
    DiagnosticKind,
    Report,
    ReadResult,
    WriteResult,
)
from .exceptions import (
    DxfStructException,
    TagStreamException,
    EndOfStream,
    DecodeException,
    LifecycleException,
    RequiredFieldException,
)
from .properties import RecordPhase


def skip_to_terminator(stream):
    '''Consume tags until the next 0-code one, that is returned (None at the end of the stream).'''
    while True:
        try:
            tag = stream.next_tag()
        except EndOfStream:
            return None

        if tag.code == 0:
            return tag


class Record(metaclass=MetaRecord):
    """
    Base class for the records: subclasses define the Field Table as class
    attributes and, optionally,

     - dxf_name: the type name written with group code 0 (a record without it
       can only be used as group inside an ArrayField)
     - emit_name: if False the type name is not written (like for comments)
     - min_version: the first format version where the record exists

    A method named validate() is called before encoding, it can raise
    ValidationException when the values don't make sense.
    """
    dxf_name = None
    emit_name = True
    min_version = None

    def __init__(self, defaults=None, compliant=Compliant.NONE, **kwargs):
        self._setup(defaults, compliant)
        self.init()

        for name, value in kwargs.items():
            if name not in self._meta.fields:
                raise AttributeError(f'{self.__class__.__name__} has no field named \'{name}\'')
            setattr(self, name, value)

    def _setup(self, defaults, compliant):
        self.logger = logging.getLogger(__name__)
        self.father = None
        self.next = None
        self.defaults = defaults if defaults is not None else DEFAULTS
        self.compliant = compliant
        self.report = Report()
        self._seen = set()
        self._bracket = None
        self._phase = RecordPhase.ALLOCATED

    @classmethod
    def allocate(cls, defaults=None, compliant=Compliant.NONE):
        '''Create a zeroed instance: strings empty, numbers zero,
        handles unassigned, collections empty.'''
        record = cls.__new__(cls)
        record._setup(defaults, compliant)
        record.reset()

        return record

    def create(self, father):
        '''Used by ArrayField to create a new group out of the prototype.'''
        instance = copy.deepcopy(self)
        instance.father = father
        instance.next = None
        instance._seen = set()

        return instance

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, Record) or other.__class__ is not self.__class__:
            return NotImplemented

        return self.values() == other.values()

    __hash__ = object.__hash__

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_codes(self) -> List[int]:
        return list(self._meta.codes.keys())

    def values(self) -> Dict:
        return {name: field.value for name, field in self.get_fields() if not field.structural}

    @property
    def phase(self):
        return self._phase

    @property
    def released(self):
        return self._phase == RecordPhase.RELEASED

    def reset(self):
        for _, field in self.get_fields():
            field.reset()

        self._phase = RecordPhase.ALLOCATED

    def init(self):
        '''Apply the declared defaults to every field.'''
        self._check_alive()

        for _, field in self.get_fields():
            field.init()

        self._phase = RecordPhase.INITIALIZED

    def release(self):
        '''Free the content of this record.

        A record still linked to a successor can't be released: the
        caller has to detach it (or use release_linked()) first.'''
        if self.next is not None:
            raise LifecycleException(
                'a successor is still attached, detach it before releasing',
                chain=[self.__class__.__name__])

        self.logger.debug('releasing %s', self.__class__.__name__)

        for _, field in self.get_fields():
            field.release()

        self._phase = RecordPhase.RELEASED

    def _check_alive(self):
        if self._phase == RecordPhase.RELEASED:
            raise LifecycleException('the record has been released', chain=[self.__class__.__name__])

    def is_compliant(self, level):
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def diagnose(self, kind, message, field=None, line=None, code=None):
        '''Record a problem into the report, or raise if the compliance asks for it.'''
        chain = [self.__class__.__name__]
        if field is not None:
            chain.append(field.name)

        if kind in COMPLIANCE:
            flag, exception = COMPLIANCE[kind]
            target = field if field is not None else self
            if target.is_compliant(flag):
                raise exception(message, chain=chain, line=line)

        return self.report.add(Diagnostic(kind, message, line=line, code=code, chain=chain))

    # decoding

    def select_field(self, code):
        '''Find the field of the table that takes this code now: the first
        candidate (in table order) that accepts it.'''
        for name in self._meta.codes.get(code, ()):
            field = getattr(self, name)
            if field.accepts(self._seen, self._bracket):
                return field

        # nobody takes it in this context: an empty field can still do
        for name in self._meta.codes.get(code, ()):
            field = getattr(self, name)
            if field.accepts_anywhere(self._seen):
                return field

        return None

    def accepts_code(self, code):
        return self.select_field(code) is not None

    def consume_tag(self, tag):
        field = self.select_field(tag.code)
        field.consume(tag)
        self._seen.add(field.name)

    def _unpack_bracket(self, tag, line):
        value = tag.value.strip()
        if value.startswith('{'):
            if self._bracket is not None:
                self.diagnose(DiagnosticKind.UNBALANCED_BRACKET,
                              f'{value} opened inside {self._bracket}', line=line, code=tag.code)
            self._bracket = value
        elif value == '}':
            if self._bracket is None:
                self.diagnose(DiagnosticKind.UNBALANCED_BRACKET,
                              'closing bracket without the opening one', line=line, code=tag.code)
            self._bracket = None
        else:
            self.diagnose(DiagnosticKind.UNKNOWN_CODE,
                          f'unexpected control string {value!r}', line=line, code=tag.code)

    def _unpack_marker(self, tag, version, line):
        expected = [
            field.value for _, field in self.get_fields()
            if field.structural and field.is_active(version)
        ]
        if tag.value.strip() not in expected:
            self.diagnose(DiagnosticKind.BAD_MARKER,
                          f'subclass marker {tag.value!r} not expected for {version.name}',
                          line=line, code=tag.code)

    def unpack_tag(self, tag, version, line=None):
        code = tag.code

        if code == 102:
            self._unpack_bracket(tag, line)
            return
        if code == 100:
            self._unpack_marker(tag, version, line)
            return

        field = self.select_field(code)

        if field is None:
            if any(name in self._seen for name in self._meta.codes.get(code, ())):
                self.diagnose(DiagnosticKind.DUPLICATE_CODE,
                              f'code {code} already read, value {tag.value!r} discarded',
                              line=line, code=code)
            elif code == 999:
                self.diagnose(DiagnosticKind.COMMENT, tag.value, line=line, code=code)
            else:
                self.diagnose(DiagnosticKind.UNKNOWN_CODE,
                              f'unknown code {code} with value {tag.value!r}', line=line, code=code)
            return

        if not field.is_active(version):
            self.diagnose(DiagnosticKind.VERSION_MISMATCH,
                          f'code {code} is not part of {version.name}', field=field, line=line, code=code)

        try:
            field.consume(tag)
        except DecodeException as e:
            # the field keeps its default and a later occurrence can still fill it
            self.diagnose(DiagnosticKind.MALFORMED_VALUE, e.message, field=field, line=line, code=code)
            return

        self._seen.add(field.name)

    def normalize(self):
        for _, field in self.get_fields():
            previous = field.value
            if field.normalize():
                self.diagnose(DiagnosticKind.DEFAULT_SUBSTITUTED,
                              f'{previous!r} replaced with {field.value!r}', field=field, code=field.code)

    def unpack(self, stream, version=None):
        '''Decode the tags following the type name, up to the 0-code tag that
        terminates the record: the terminator is returned (None if the stream ended).

        The problems are collected into self.report.'''
        self._check_alive()

        version = DxfVersion(version if version is not None else stream.version)

        self._phase = RecordPhase.UNPACKING
        self.report = Report()
        self._seen = set()
        self._bracket = None

        if self.min_version is not None and version < self.min_version:
            self.diagnose(DiagnosticKind.VERSION_MISMATCH,
                          f'{self.dxf_name} doesn\'t exist before {self.min_version.name}',
                          line=stream.line_number)

        terminator = None

        while True:
            try:
                tag = stream.next_tag()
            except EndOfStream:
                self.diagnose(DiagnosticKind.TRUNCATED, 'stream ended before the end of the record',
                              line=stream.line_number)
                break

            if tag.code == 0:
                terminator = tag
                break

            self.logger.debug('unpacking %s: %r', self.__class__.__name__, tag)
            self.unpack_tag(tag, version, line=stream.line_number)

        if self._bracket is not None:
            self.diagnose(DiagnosticKind.UNBALANCED_BRACKET, f'{self._bracket} never closed',
                          line=stream.line_number)
            self._bracket = None

        self.normalize()

        self._phase = RecordPhase.DONE

        return terminator

    @classmethod
    def read(cls, stream, defaults=None, compliant=Compliant.NONE, version=None) -> ReadResult:
        '''Decode a record whose type name has already been consumed.

        A failure due to compliance discards the record and skips the tags up to
        the next record; only a broken stream raises.'''
        record = cls.allocate(defaults=defaults, compliant=compliant)
        record.init()

        try:
            terminator = record.unpack(stream, version=version)
        except TagStreamException:
            raise
        except DxfStructException as e:
            record.report.add(Diagnostic(DiagnosticKind.FAILED, e.message, line=e.line, chain=e.chain))
            terminator = skip_to_terminator(stream)

            return ReadResult(None, terminator, record.report, ok=False, error=e)

        return ReadResult(record, terminator, record.report)

    # encoding

    def check(self, version):
        '''Verify the record can be encoded, raising otherwise.'''
        self._check_alive()

        for name, field in self.get_fields():
            if field.required and field.is_empty():
                raise RequiredFieldException(
                    'required field is empty', chain=[self.__class__.__name__, name])

        if hasattr(self, 'validate'):
            self.validate()

        if self.min_version is not None and version < self.min_version:
            self.diagnose(DiagnosticKind.VERSION_MISMATCH,
                          f'{self.dxf_name} doesn\'t exist before {self.min_version.name}')

    def iter_tags(self, version):
        if self.emit_name and self.dxf_name:
            yield Tag(0, self.dxf_name)

        for field_name, field in self.get_fields():
            self.logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))
            yield from field.iter_tags(version)

    def _pack_tags(self, version):
        version = DxfVersion(version)

        self.report = Report()
        self.check(version)

        self._phase = RecordPhase.PACKING
        try:
            tags = list(self.iter_tags(version))
        finally:
            self._phase = RecordPhase.DONE

        return tags

    def pack(self, version=DxfVersion.AC1015, stream=None):
        '''Encode the record, raising on failure.

        Without a stream the encoded bytes are returned.'''
        tags = self._pack_tags(version)

        stream = TagStream(version=version) if stream is None else stream
        stream.write_tags(tags)

        return stream.getvalue()

    def write(self, stream, version=None) -> WriteResult:
        '''Encode the record into the stream.

        Nothing is written if the record is not encodable.'''
        version = version if version is not None else stream.version

        try:
            tags = self._pack_tags(version)
        except TagStreamException:
            raise
        except DxfStructException as e:
            self.report.add(Diagnostic(DiagnosticKind.FAILED, e.message, chain=e.chain))

            return WriteResult(self, self.report, ok=False, error=e)

        stream.write_tags(tags)

        return WriteResult(self, self.report)
