import logging
from enum import Enum, auto


class RecordPhase(Enum):
    '''Enum to state the actual phase of a record'''
    ALLOCATED   = 0
    INITIALIZED = auto()
    UNPACKING   = auto()
    PACKING     = auto()
    DONE        = auto()
    RELEASED    = auto()


def get_root_from_field(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    The expression is resolved with respect to the record owning the field:

     - '.name' indicates a field at the same level
     - 'name.other' starts from the root record (useful for groups
       living inside an ArrayField)

    so that an emission condition can be written like

        x1 = fields.StructField(11, 'd', emit=IfDiffers(('.x1', '.x0')))
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_field(instance)

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug('resolved \'%s\' as %r', self.expression, field)

        return field

    def resolve(self, instance):
        return self.resolve_field(instance).value


class Condition(object):
    '''Emission predicate: called with the field about to be emitted,
    it returns True if the field must be written.'''

    def __call__(self, field):
        raise NotImplementedError(f'method {self.__class__.__name__}.__call__() not implemented')

    def __and__(self, other):
        return AllOf(self, other)

    def __or__(self, other):
        return AnyOf(self, other)

    def __repr__(self):
        return f'<{self.__class__.__name__}>'


class Always(Condition):

    def __call__(self, field):
        return True


class AllOf(Condition):

    def __init__(self, *conditions):
        self.conditions = conditions

    def __call__(self, field):
        return all(_(field) for _ in self.conditions)


class AnyOf(Condition):

    def __init__(self, *conditions):
        self.conditions = conditions

    def __call__(self, field):
        return any(_(field) for _ in self.conditions)


class IfNotDefault(Condition):
    '''Default suppression: skip the field when it holds its declared default.'''

    def __call__(self, field):
        return field.value != field.value_from_default()


class IfNotEmpty(Condition):

    def __call__(self, field):
        return not field.is_empty()


class IfAnyNotDefault(Condition):
    '''The field is written if any of the referenced fields is not at its default,
    used for coordinates that must be written together.'''

    def __init__(self, *expressions):
        self.dependencies = [Dependency(_) for _ in expressions]

    def __call__(self, field):
        for dependency in self.dependencies:
            other = dependency.resolve_field(field)
            if other.value != other.value_from_default():
                return True

        return False


class IfNonZero(Condition):

    def __init__(self, *expressions):
        self.dependencies = [Dependency(_) for _ in expressions]

    def __call__(self, field):
        return any(_.resolve(field) for _ in self.dependencies)


class IfDiffers(Condition):
    '''Paired-field suppression: each argument is a couple of expressions,
    the field is written if at least one couple holds different values.'''

    def __init__(self, *pairs):
        self.pairs = [(Dependency(a), Dependency(b)) for a, b in pairs]

    def __call__(self, field):
        return any(a.resolve(field) != b.resolve(field) for a, b in self.pairs)
