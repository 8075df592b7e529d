from .. import fields
from ..enum import DxfVersion
from .object import DxfObject


class Dictionary(DxfObject):
    dxf_name = 'DICTIONARY'
    min_version = DxfVersion.AC1012

    subclass_dictionary = fields.MarkerField('AcDbDictionary')
    entry_name          = fields.StringField(3, required=True)
    entry_handle        = fields.HandleField(350)
