from .. import fields
from ..config import Default
from ..enum import DxfVersion
from ..properties import IfNotDefault
from .object import DxfObject


class Entity(DxfObject):
    '''Graphical objects: they share layer, linetype, color and so on.'''
    subclass_entity = fields.MarkerField('AcDbEntity')
    paperspace      = fields.StructField(67, 'h', emit=IfNotDefault())
    layer           = fields.StringField(8, default=Default('layer'), replace=('',))
    linetype        = fields.StringField(6, default=Default('linetype'), emit=IfNotDefault())
    elevation       = fields.StructField(38, 'd', max_version=DxfVersion.AC1009, emit=IfNotDefault())
    color           = fields.StructField(62, 'h', default=Default('color'), emit=IfNotDefault())
    linetype_scale  = fields.StructField(48, 'd', default=Default('linetype_scale'), min_version=DxfVersion.AC1012, emit=IfNotDefault())
    visibility      = fields.StructField(60, 'h', default=Default('visibility'), min_version=DxfVersion.AC1012, emit=IfNotDefault())
