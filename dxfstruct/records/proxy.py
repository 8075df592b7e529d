from .. import fields
from ..config import Default
from .entity import Entity


class ProxyEntity(Entity):
    '''Entity of an application not available: its graphics are kept as
    binary chunks so that they can be written back untouched.'''
    dxf_name = 'ACAD_PROXY_ENTITY'

    subclass_proxy     = fields.MarkerField('AcDbProxyEntity')
    class_id           = fields.StructField(90, 'i', default=Default('proxy_entity_id'))
    application_id     = fields.StructField(91, 'i')
    graphics_data_size = fields.StructField(92, 'i')
    graphics_data      = fields.ArrayField(fields.BinaryField(310))
