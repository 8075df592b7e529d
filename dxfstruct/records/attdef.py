from .. import fields
from ..properties import IfNotDefault
from .text import TextBase, VerticalAlignment


class AttDef(TextBase):
    '''Attribute definition: here the text is the default value of the attribute.'''
    dxf_name = 'ATTDEF'

    subclass_attdef = fields.MarkerField('AcDbAttributeDefinition')
    prompt          = fields.StringField(3)
    tag             = fields.StringField(2, required=True)
    attr_flags      = fields.StructField(70, 'h')
    field_length    = fields.StructField(73, 'h', emit=IfNotDefault())
    vert_align      = fields.StructField(74, 'h', enum=VerticalAlignment, emit=IfNotDefault())
