from .. import fields
from ..exceptions import ValidationException
from ..properties import IfNotDefault, IfAnyNotDefault
from .entity import Entity


EXTRUSION = IfAnyNotDefault('.extrusion_x', '.extrusion_y', '.extrusion_z')


class Arc(Entity):
    dxf_name = 'ARC'

    subclass_circle = fields.MarkerField('AcDbCircle')
    thickness       = fields.StructField(39, 'd', emit=IfNotDefault())
    x0              = fields.StructField(10, 'd')
    y0              = fields.StructField(20, 'd')
    z0              = fields.StructField(30, 'd')
    radius          = fields.StructField(40, 'd')
    subclass_arc    = fields.MarkerField('AcDbArc')
    start_angle     = fields.StructField(50, 'd')
    end_angle       = fields.StructField(51, 'd')
    extrusion_x     = fields.StructField(210, 'd', emit=EXTRUSION)
    extrusion_y     = fields.StructField(220, 'd', emit=EXTRUSION)
    extrusion_z     = fields.StructField(230, 'd', default=1.0, emit=EXTRUSION)

    def validate(self):
        chain = [self.__class__.__name__]
        if self.radius.value == 0.0:
            raise ValidationException('the radius is zero', chain=chain + ['radius'])
        if self.start_angle.value == self.end_angle.value:
            raise ValidationException('start angle and end angle are the same', chain=chain + ['end_angle'])
