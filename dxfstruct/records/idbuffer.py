from .. import fields
from .object import DxfObject


class IdBuffer(DxfObject):
    '''A list of references to entities.

    The 330 inside the reactors bracket is the owner, all the other ones
    are appended to entity_pointers in the order they are read.'''
    dxf_name = 'IDBUFFER'

    subclass_idbuffer = fields.MarkerField('AcDbIdBuffer')
    entity_pointers   = fields.ArrayField(fields.HandleField(330))
