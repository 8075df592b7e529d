"""
A Field is an entry of the Field Table of a record: it knows its group code, how to
decode/encode its value, its default and when it has to be written.
"""
import logging

from . import values
from .chain import Chain
from .config import Default, DEFAULTS
from .enum import Compliant, DxfVersion, TypeClass
from .meta import FieldBase
from .properties import RecordPhase, Always, IfNotEmpty, get_root_from_field
from .streams import Tag
from .diagnostics import DiagnosticKind
from .exceptions import EncodeException, EnumException


class Field(FieldBase):
    """Base class to subclass from"""
    type_class = None
    zero = None
    # structural fields are emitted but don't hold data of the record
    structural = False

    def __init__(self, code, default=None, name=None, father=None, type_class=None,
                 min_version=None, max_version=None, emit=None, required=False,
                 replace=(), compliant=Compliant.INHERIT):
        super().__init__()
        self._phase = RecordPhase.ALLOCATED
        self.logger = logging.getLogger(__name__)
        self.code = code
        self.name = name
        self.father = father
        self.default = default
        if type_class is not None:
            self.type_class = type_class
        if self.type_class is None:
            self.type_class = values.type_class_for(code)
        if not values.is_compatible(code, self.type_class):
            raise ValueError(f'group code {code} can\'t hold a value of type {self.type_class.name}')
        self.min_version = min_version
        self.max_version = max_version
        self.emit = emit if emit is not None else Always()
        self.required = required
        self.replace = tuple(replace)
        self.compliant = compliant

        self.init()

    def __repr__(self):
        return '<%s(%d=%r)>' % (self.__class__.__name__, self.code, self.value)

    def __str__(self):
        return str(self.value)

    def init(self):
        self.value = self.value_from_default()
        self._phase = RecordPhase.INITIALIZED

    def reset(self):
        '''Bring the field to its zero value, as just allocated.'''
        self.value = self.zero_value()
        self._phase = RecordPhase.ALLOCATED

    def release(self):
        self.reset()
        self._phase = RecordPhase.RELEASED

    def zero_value(self):
        return self.zero

    def value_from_default(self):
        if isinstance(self.default, Default):
            return self.default.resolve(self.get_defaults())
        if callable(self.default):
            return self.default()

        return self.default

    def get_defaults(self):
        root = get_root_from_field(self)
        defaults = getattr(root, 'defaults', None)

        return defaults if defaults is not None else DEFAULTS

    def get_codes(self):
        return [self.code]

    def is_compliant(self, level):
        '''Returns the compliant'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def is_active(self, version):
        '''Version gate: is this field part of the format at this version?'''
        if self.min_version is not None and version < self.min_version:
            return False
        if self.max_version is not None and version > self.max_version:
            return False

        return True

    def is_empty(self):
        return self.value is None or self.value == ''

    def accepts(self, seen, bracket):
        return self.name not in seen

    def accepts_anywhere(self, seen):
        '''Last resort when no field accepts the code in the current context.'''
        return False

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    def decode(self, raw):
        return values.decode(self.code, raw, self.type_class)

    def encode(self, value):
        try:
            return values.encode(self.code, value, self.type_class)
        except (ValueError, TypeError) as e:
            raise EncodeException(f'{value!r} can\'t be encoded: {e}', chain=[self.name] if self.name else None)

    def consume(self, tag):
        '''Decode the value of the tag and store it.'''
        self.value = self.decode(tag.value)

    def normalize(self):
        '''Default substitution: returns True if the value was replaced.'''
        if self.replace and self.value in self.replace:
            self.value = self.value_from_default()
            return True

        return False

    def emit_value(self):
        if self.replace and self.value in self.replace:
            value = self.value_from_default()
            diagnose = getattr(self.father, 'diagnose', None)
            if diagnose is not None:
                diagnose(DiagnosticKind.DEFAULT_SUBSTITUTED,
                         f'{self.value!r} replaced with {value!r}', field=self, code=self.code)
            return value

        return self.value

    def should_emit(self):
        return self.emit(self)

    def iter_tags(self, version):
        if not self.is_active(version) or not self.should_emit():
            return

        yield Tag(self.code, self.encode(self.emit_value()))


class StructField(Field):
    """
    Numeric field: the struct format indicates the width of the value, so that
    the values not fitting it are refused.

    Like for the integers to/from bytes, it's possible to indicate via the "enum"
    argument some subclass of enum.Enum so to have directly a representation of
    the integer value of the field itself.
    """
    FORMATS = {
        'h': (TypeClass.INT16, 0),
        'i': (TypeClass.INT32, 0),
        'q': (TypeClass.INT64, 0),
        '?': (TypeClass.BOOL, False),
        'f': (TypeClass.FLOAT, 0.0),
        'd': (TypeClass.DOUBLE, 0.0),
    }

    def __init__(self, code, format='h', default=None, enum=None, **kw):
        if format not in self.FORMATS:
            raise ValueError(f'format \'{format}\' is not supported')
        self.format = format
        self.enum = enum
        type_class, self.zero = self.FORMATS[format]
        super().__init__(code, default=self.zero if default is None else default, type_class=type_class, **kw)

    def zero_value(self):
        if self.enum and self.zero in self.enum._value2member_map_:
            return self.enum(self.zero)
        return self.zero

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def is_empty(self):
        return False

    def _unpack_enum(self, value):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise EnumException(f'{self.enum.__name__} doesn\'t have element with value {value}')

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value {value} in it')

            return value

    def decode(self, raw):
        value = super().decode(raw)
        if self.enum:
            value = self._unpack_enum(value)

        return value

    def encode(self, value):
        if self.enum and isinstance(value, self.enum):
            value = value.value

        return super().encode(value)


class StringField(Field):
    zero = ''

    def __init__(self, code, default='', **kw):
        super().__init__(code, default=default, **kw)


class BinaryField(Field):
    """A chunk of binary data, hexadecimal encoded on the wire."""
    zero = b''

    def __init__(self, code=310, default=b'', **kw):
        super().__init__(code, default=default, **kw)

    def is_empty(self):
        return len(self.value) == 0


class HandleField(Field):
    """Handle of a record: None is the 'unassigned' value and it's never written."""

    def __init__(self, code=5, default=None, emit=None, **kw):
        super().__init__(code, default=default, emit=emit if emit is not None else IfNotEmpty(), **kw)

    def __repr__(self):
        value = self.value
        return '<%s(%d=%s)>' % (self.__class__.__name__, self.code, 'None' if value is None else '%x' % value)

    def iter_tags(self, version):
        if self.value is None:
            return

        yield from super().iter_tags(version)


class OwnerField(HandleField):
    """Reference to the owner (330 soft, 360 hard).

    When a bracket is indicated (like "{ACAD_REACTORS") the value is written
    wrapped between the 102 open/close tags and, while decoding, only a value
    found inside that bracket is assigned to this field: the same code found
    outside goes to the next candidate of the Field Table."""

    def __init__(self, code=330, bracket=None, **kw):
        self.bracket = bracket
        super().__init__(code, **kw)

    def accepts(self, seen, bracket):
        return self.name not in seen and bracket == self.bracket

    def accepts_anywhere(self, seen):
        return self.name not in seen

    def iter_tags(self, version):
        tags = list(super().iter_tags(version))
        if not tags or not self.bracket:
            yield from tags
            return

        yield Tag(102, self.bracket)
        yield from tags
        yield Tag(102, '}')


class MarkerField(Field):
    """Subclass marker: it names the schema layer of the fields that follow."""
    structural = True

    def __init__(self, marker, min_version=DxfVersion.AC1012, **kw):
        super().__init__(100, default=marker, min_version=min_version, **kw)

    def get_codes(self):
        # markers are checked by the record, never dispatched as data
        return []

    def reset(self):
        self.init()


class ArrayField(Field):
    '''Un/Pack a repeatable field.

    The element can be a field (all the tags with its group code are collected
    in order) or a record without type name, used as a group: in that case a new
    element starts every time a code already filled in the current element shows up,
    and the elements are written back one after the other, keeping the fields of
    each group together.

        layer_names = fields.ArrayField(fields.StringField(8))
        entries     = fields.ArrayField(LayerIndexEntry())
    '''

    def __init__(self, field, **kw):
        self.field = field
        kw.setdefault('default', None)
        super().__init__(field.code if not self.is_group else field.get_codes()[0], type_class=None if self.is_group else field.type_class, **kw)

    @property
    def is_group(self):
        return hasattr(self.field, '_meta')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def zero_value(self):
        return Chain()

    def value_from_default(self):
        return Chain(self.default or [])

    def _set_value(self, value):
        if not isinstance(value, Chain):
            value = Chain(value)
        if self.is_group:
            for element in value:
                element.father = self
        self._value = value

    def get_codes(self):
        return self.field.get_codes()

    def is_empty(self):
        return len(self.value) == 0

    def accepts(self, seen, bracket):
        return True

    def release(self):
        self.value.release_all()
        super().release()

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        if self.is_group:
            element.father = self
        return self.value.push_back(element)

    def consume(self, tag):
        if not self.is_group:
            self.append(self.field.decode(tag.value))
            return

        element = self.value.tail
        if element is None or not element.accepts_code(tag.code):
            element = self.append(self.instance_element())

        element.consume_tag(tag)

    def normalize(self):
        return False

    def emit_value(self):
        return self.value

    def iter_tags(self, version):
        if not self.is_active(version) or not self.should_emit():
            return

        for element in self.value:
            if self.is_group:
                yield from element.iter_tags(version)
            else:
                yield Tag(self.code, self.field.encode(element))
