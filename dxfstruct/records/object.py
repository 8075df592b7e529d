from .. import fields
from ..core import Record
from ..enum import DxfVersion


REACTORS = '{ACAD_REACTORS'
XDICTIONARY = '{ACAD_XDICTIONARY'


class DxfObject(Record):
    '''Common header of the non graphical objects and of the entities.'''
    handle = fields.HandleField(5)
    owner_soft = fields.OwnerField(330, bracket=REACTORS, min_version=DxfVersion.AC1014)
    owner_hard = fields.OwnerField(360, bracket=XDICTIONARY, min_version=DxfVersion.AC1014)
