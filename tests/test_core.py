import pytest

from dxfstruct.chain import Chain
from dxfstruct.config import Default, Defaults
from dxfstruct.core import Record
from dxfstruct.diagnostics import DiagnosticKind
from dxfstruct.enum import Compliant, DxfVersion
from dxfstruct.exceptions import (
    LifecycleException,
    RequiredFieldException,
    TagStreamException,
    UnknownCodeException,
)
from dxfstruct.fields import (
    ArrayField,
    HandleField,
    MarkerField,
    OwnerField,
    StringField,
    StructField,
)
from dxfstruct.properties import IfNotDefault, RecordPhase
from dxfstruct.streams import Tag, TagStream


class Dummy(Record):
    dxf_name = 'DUMMY'

    handle   = HandleField(5)
    name     = StringField(2, required=True)
    count    = StructField(70, 'h', emit=IfNotDefault())
    scale    = StructField(40, 'd', default=1.0, emit=IfNotDefault())
    pointers = ArrayField(HandleField(330))


class Gated(Record):
    dxf_name = 'GATED'

    subclass = MarkerField('AcDbGated')
    scale    = StructField(48, 'd', default=1.0, min_version=DxfVersion.AC1012)


class Owned(Record):
    dxf_name = 'OWNED'

    owner    = OwnerField(330, bracket='{ACAD_REACTORS')
    pointers = ArrayField(HandleField(330))
    layer    = StringField(8, default=Default('layer'), replace=('',))
    height   = StructField(40, 'd', default=1.0, replace=(0.0,))


def read_body(cls, body, **kwargs):
    """Decode the body of a record, the type name is supposed already consumed."""
    stream = TagStream(body, version=kwargs.pop('version', DxfVersion.AC1015))
    return cls.read(stream, **kwargs)


def test_field_table():
    """Check the order of the fields is the declaration one."""
    assert Dummy._meta.fields == ['handle', 'name', 'count', 'scale', 'pointers']
    assert Dummy._meta.codes == {
        5: ['handle'],
        2: ['name'],
        70: ['count'],
        40: ['scale'],
        330: ['pointers'],
    }

    dummy = Dummy()

    assert dummy.name.father == dummy
    assert dummy.name is not Dummy().name


def test_field_table_inheritance():
    class Child(Dummy):
        extra = StringField(3)

    assert Child._meta.fields == ['handle', 'name', 'count', 'scale', 'pointers', 'extra']


def test_wrong_type_class_in_table():
    with pytest.raises(ValueError):
        class Wrong(Record):
            layer = StructField(8, 'd')


def test_allocate_and_init():
    dummy = Dummy.allocate()

    assert dummy.phase == RecordPhase.ALLOCATED
    assert dummy.handle.value is None
    assert dummy.name.value == ''
    assert dummy.scale.value == 0.0
    assert len(dummy.pointers) == 0

    dummy.init()

    assert dummy.phase == RecordPhase.INITIALIZED
    assert dummy.scale.value == 1.0


def test_defaults_object():
    owned = Owned(defaults=Defaults(layer='WALLS'))

    assert owned.layer.value == 'WALLS'
    assert Owned().layer.value == '0'


def test_unknown_field_name():
    with pytest.raises(AttributeError):
        Dummy(kebab=1)


def test_pack():
    dummy = Dummy(name='x')

    assert dummy.pack() == b'  0\nDUMMY\n  2\nx\n'


def test_handle_emission():
    """The unassigned handle is never written."""
    assert b'  5\n' not in Dummy(name='x').pack()
    assert Dummy(handle=0x1a, name='x').pack() == b'  0\nDUMMY\n  5\n1a\n  2\nx\n'


def test_round_trip():
    dummy = Dummy(handle=0x1a, name='hello', count=3, scale=2.5, pointers=[1, 2, 3])

    data = dummy.pack() + b'  0\nENDSEC\n'

    stream = TagStream(data)

    assert stream.next_tag() == (0, 'DUMMY')

    result = Dummy.read(stream)

    assert result.ok
    assert result.terminator == Tag(0, 'ENDSEC')
    assert result.record == dummy
    assert result.record.phase == RecordPhase.DONE
    assert len(result.report) == 0


def test_default_suppression():
    data = Dummy(name='x', scale=1.0).pack()

    assert b' 40\n' not in data

    result = read_body(Dummy, data[len(b'  0\nDUMMY\n'):] + b'  0\nENDSEC\n')

    assert result.record.scale.value == 1.0


def test_version_gating():
    gated = Gated(scale=2.0)

    assert gated.pack(version=DxfVersion.AC1009) == b'  0\nGATED\n'
    assert gated.pack(version=DxfVersion.AC1015) == b'  0\nGATED\n100\nAcDbGated\n 48\n2.0\n'

    result = read_body(Gated, b'  0\nENDSEC\n', version=DxfVersion.AC1009)

    assert result.ok
    assert result.record.scale.value == 1.0


def test_field_below_its_version():
    result = read_body(Gated, b' 48\n3.0\n  0\nENDSEC\n', version=DxfVersion.AC1009)

    assert result.ok
    assert result.record.scale.value == 3.0
    assert result.report.kinds() == [DiagnosticKind.VERSION_MISMATCH]


def test_repeated_field_accumulation():
    result = read_body(Dummy, b'  2\nx\n330\n2a\n330\n2b\n330\n2c\n  0\nENDSEC\n')

    assert result.record.pointers.value == [0x2a, 0x2b, 0x2c]


def test_unknown_code_tolerance():
    result = read_body(Dummy, b'  2\nx\n1234\nwhat\n 70\n5\n  0\nENDSEC\n')

    assert result.ok
    assert result.record.name.value == 'x'
    assert result.record.count.value == 5
    assert result.report.kinds() == [DiagnosticKind.UNKNOWN_CODE]
    assert result.report.of_kind(DiagnosticKind.UNKNOWN_CODE)[0].line == 4


def test_unknown_code_compliant():
    """With compliance the record is discarded but the stream can go on."""
    stream = TagStream(b'  2\nx\n1234\nwhat\n 70\n5\n  0\nENDSEC\n')

    result = Dummy.read(stream, compliant=Compliant.UNKNOWN)

    assert not result
    assert result.record is None
    assert isinstance(result.error, UnknownCodeException)
    assert result.terminator == Tag(0, 'ENDSEC')
    assert DiagnosticKind.FAILED in result.report.kinds()


def test_malformed_value():
    result = read_body(Dummy, b'  2\nx\n 40\nkebab\n 70\n7\n  0\nENDSEC\n')

    assert result.ok
    assert result.record.scale.value == 1.0
    assert result.record.count.value == 7
    assert result.report.kinds() == [DiagnosticKind.MALFORMED_VALUE]


def test_duplicate_code():
    """The first value wins."""
    result = read_body(Dummy, b'  2\nfirst\n  2\nsecond\n  0\nENDSEC\n')

    assert result.record.name.value == 'first'
    assert result.report.kinds() == [DiagnosticKind.DUPLICATE_CODE]


def test_malformed_value_then_valid():
    """A value that can't be decoded doesn't fill the field."""
    result = read_body(Dummy, b'  2\nx\n 40\nkebab\n 40\n2.0\n  0\nENDSEC\n')

    assert result.ok
    assert result.record.scale.value == 2.0
    assert result.report.kinds() == [DiagnosticKind.MALFORMED_VALUE]


class Single(Record):
    dxf_name = 'SINGLE'

    ratio = StructField(41, 'f', default=1.0)


def test_float_overflow():
    result = read_body(Single, b' 41\n1e300\n  0\nENDSEC\n')

    assert result.ok
    assert result.record.ratio.value == 1.0
    assert result.report.kinds() == [DiagnosticKind.MALFORMED_VALUE]


def test_comment_inside_record():
    result = read_body(Dummy, b'999\nhello\n  2\nx\n  0\nENDSEC\n')

    assert result.ok
    assert result.report.of_kind(DiagnosticKind.COMMENT)[0].message == 'hello'


def test_bad_marker():
    result = read_body(Gated, b'100\nAcDbKebab\n  0\nENDSEC\n')

    assert result.ok
    assert result.report.kinds() == [DiagnosticKind.BAD_MARKER]

    result = read_body(Gated, b'100\nAcDbKebab\n  0\nENDSEC\n', compliant=Compliant.MARKER)

    assert not result.ok


def test_truncated():
    result = read_body(Dummy, b'  2\nx\n')

    assert result.ok
    assert result.terminator is None
    assert result.report.kinds() == [DiagnosticKind.TRUNCATED]


def test_broken_stream():
    """A broken stream is not recoverable."""
    with pytest.raises(TagStreamException):
        read_body(Dummy, b'  2\nx\nkebab\nvalue\n')


def test_bracket_dispatch():
    """Only the 330 inside the reactors bracket is the owner."""
    result = read_body(Owned, (
        b'330\n1\n'
        b'102\n{ACAD_REACTORS\n'
        b'330\n2a\n'
        b'102\n}\n'
        b'330\n3\n'
        b'  0\nENDSEC\n'
    ))

    owned = result.record

    assert owned.owner.value == 0x2a
    assert owned.pointers.value == [1, 3]
    assert len(result.report) == 0

    assert owned.pack() == (
        b'  0\nOWNED\n'
        b'102\n{ACAD_REACTORS\n'
        b'330\n2a\n'
        b'102\n}\n'
        b'330\n1\n'
        b'330\n3\n'
        b'  8\n0\n'
        b' 40\n1.0\n'
    )


def test_owner_outside_bracket():
    """The owner is taken also when written without its bracket."""
    class Lonely(Record):
        owner = OwnerField(330, bracket='{ACAD_REACTORS')
        name  = StringField(2)

    result = read_body(Lonely, b'330\n1f\n  2\nx\n330\n2f\n  0\nENDSEC\n')

    assert result.record.owner.value == 0x1f
    assert result.report.kinds() == [DiagnosticKind.DUPLICATE_CODE]

    # with a collection for the same code, the plain ones go there
    result = read_body(Owned, b'330\n1f\n  0\nENDSEC\n')

    assert result.record.owner.value is None
    assert result.record.pointers.value == [0x1f]
    assert len(result.report) == 0


def test_unbalanced_bracket():
    result = read_body(Owned, b'102\n}\n102\n{ACAD_REACTORS\n330\n2a\n  0\nENDSEC\n')

    assert result.ok
    assert result.record.owner.value == 0x2a
    assert result.report.kinds() == [
        DiagnosticKind.UNBALANCED_BRACKET,
        DiagnosticKind.UNBALANCED_BRACKET,
    ]


def test_default_substitution():
    result = read_body(Owned, b'  8\n\n 40\n0.0\n  0\nENDSEC\n')

    assert result.record.layer.value == '0'
    assert result.record.height.value == 1.0
    assert result.report.kinds() == [
        DiagnosticKind.DEFAULT_SUBSTITUTED,
        DiagnosticKind.DEFAULT_SUBSTITUTED,
    ]


def test_required_field():
    dummy = Dummy()

    with pytest.raises(RequiredFieldException):
        dummy.pack()

    stream = TagStream()
    result = dummy.write(stream)

    assert not result
    assert isinstance(result.error, RequiredFieldException)
    assert stream.getvalue() == b''


def test_write():
    stream = TagStream(version=DxfVersion.AC1009)

    result = Gated(scale=3.0).write(stream)

    assert result.ok
    assert stream.getvalue() == b'  0\nGATED\n'


def test_release():
    first = Dummy(name='first')
    second = Dummy(name='second')

    Chain([first, second])

    assert first.next is second

    # nothing is freed
    with pytest.raises(LifecycleException):
        first.release()

    assert not first.released
    assert first.name.value == 'first'

    first.next = None
    first.release()

    assert first.released
    assert first.name.value == ''

    with pytest.raises(LifecycleException):
        first.pack()

    with pytest.raises(LifecycleException):
        first.init()


def test_equality():
    assert Dummy(name='x') == Dummy(name='x')
    assert Dummy(name='x') != Dummy(name='y')
    assert Dummy(name='x') != Owned()
