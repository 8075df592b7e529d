from .. import fields
from ..core import Record
from ..utils import julian_date
from .object import DxfObject


class LayerIndexEntry(Record):
    '''One layer of the index: the three codes repeat for each layer.'''
    layer_name  = fields.StringField(8)
    id_buffer   = fields.HandleField(360)
    entry_count = fields.StructField(90, 'i')


class LayerIndex(DxfObject):
    dxf_name = 'LAYER_INDEX'

    subclass_index       = fields.MarkerField('AcDbIndex')
    time_stamp           = fields.StructField(40, 'd', default=julian_date)
    subclass_layer_index = fields.MarkerField('AcDbLayerIndex')
    entries              = fields.ArrayField(LayerIndexEntry())
