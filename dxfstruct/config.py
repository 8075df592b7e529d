'''
Defaults consumed by Record.init().

Field tables never hardcode these values: they refer to them by name with
Default('layer') so that a drawing can be created with different defaults
just by passing another Defaults instance to its records.
'''


class Defaults(object):
    layer = '0'
    linetype = 'BYLAYER'
    text_style = 'STANDARD'
    color = 256  # BYLAYER
    linetype_scale = 1.0
    visibility = 0
    proxy_entity_id = 498

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not hasattr(self.__class__, name):
                raise AttributeError(f"'{name}' is not a known default")
            setattr(self, name, value)

    def __repr__(self):
        names = [_ for _ in dir(self.__class__) if not _.startswith('_')]
        return '<%s(%s)>' % (
            self.__class__.__name__,
            ','.join('%s=%r' % (_, getattr(self, _)) for _ in names),
        )


class Default(object):
    '''Placeholder for a value resolved against a Defaults instance.'''

    def __init__(self, name):
        if not hasattr(Defaults, name):
            raise AttributeError(f"'{name}' is not a known default")
        self.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def resolve(self, defaults):
        return getattr(defaults, self.name)


DEFAULTS = Defaults()
