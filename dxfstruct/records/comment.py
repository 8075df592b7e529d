from .. import fields
from ..core import Record


class Comment(Record):
    '''A comment line: it's written without the type name, only as 999.'''
    dxf_name = 'COMMENT'
    emit_name = False

    value = fields.StringField(999)
