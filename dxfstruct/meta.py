import copy
import logging


# type name -> record class, filled while the record classes are defined
REGISTRY = {}


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        # accessed from the class we return the prototype
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name in data:
            return data[self.field.name]
        else:
            self.logger.debug("create new field for field named '%s'", self.field.name)
            new_field = self.field.create(father=instance)
            data[self.field.name] = new_field
            return data[self.field.name]

    def __set__(self, instance, value):
        self.logger.debug("__set__ from %s for field named '%s'", instance.__class__.__name__, self.field.name)
        data = instance.__dict__

        # if the value is the same type then set as it is
        if isinstance(value, self.field.__class__):
            value.father = instance
            value.name = self.field.name
            data[self.field.name] = value
        # otherwise delegate to the field
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_record(self, cls, name):
        if not getattr(cls, name, None):
            setattr(cls, name, FieldDescriptor(self, name))
        else:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the abstraction: this is the Field Table."""

    def __init__(self):
        self.fields = []
        self.codes = {}

    def add_field(self, name, field):
        self.fields.append(name)
        for code in field.get_codes():
            self.codes.setdefault(code, []).append(name)


class MetaRecord(type):

    def __new__(cls, names, bases, attrs):
        '''All of this is a big hack, maybe too inspired by how Django does a similar thing!'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaRecord, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        cls.logger = logging.getLogger(__name__)

        # handle inheritance: the fields of the parents come first
        parents = [_ for _ in bases if isinstance(_, MetaRecord)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                descriptor = parent.__dict__[obj_name]
                setattr(new_cls, obj_name, descriptor)
                new_cls._meta.add_field(obj_name, descriptor.field)

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        dxf_name = attrs.get('dxf_name')
        if dxf_name:
            if dxf_name in REGISTRY:
                cls.logger.warning('record type \'%s\' registered again by %s', dxf_name, new_cls.__name__)
            REGISTRY[dxf_name] = new_cls

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_record'):
            cls.logger.debug('contribute_to_record() found for field \'%s\'' % name)
            value.contribute_to_record(cls, name)
            cls._meta.add_field(name, value)
        else:
            setattr(cls, name, value)
