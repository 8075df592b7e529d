from .. import fields
from ..core import Record


class AppId(Record):
    '''Entry of the APPID table: the name of an application that
    attaches extended data to the records.

    The owners here are plain 330/360 tags, without brackets.'''
    dxf_name = 'APPID'

    handle            = fields.HandleField(5)
    subclass_table    = fields.MarkerField('AcDbSymbolTableRecord')
    subclass_regapp   = fields.MarkerField('AcDbRegAppTableRecord')
    application_name  = fields.StringField(2, required=True)
    standard_flag     = fields.StructField(70, 'h')
    owner_soft        = fields.OwnerField(330)
    owner_hard        = fields.OwnerField(360)
