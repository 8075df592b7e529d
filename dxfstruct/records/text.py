from enum import IntEnum

from .. import fields
from ..config import Default
from ..exceptions import RequiredFieldException
from ..properties import IfNotDefault, IfNonZero, IfDiffers, IfAnyNotDefault
from .entity import Entity


class HorizontalAlignment(IntEnum):
    LEFT    = 0
    CENTER  = 1
    RIGHT   = 2
    ALIGNED = 3
    MIDDLE  = 4
    FIT     = 5


class VerticalAlignment(IntEnum):
    BASELINE = 0
    BOTTOM   = 1
    MIDDLE   = 2
    TOP      = 3


# the alignment point is meaningful only for a justified text placed
# somewhere else than the insertion point
ALIGNMENT_POINT = IfNonZero('.hor_align', '.vert_align') & IfDiffers(
    ('.x0', '.x1'),
    ('.y0', '.y1'),
    ('.z0', '.z1'),
)

EXTRUSION = IfAnyNotDefault('.extrusion_x', '.extrusion_y', '.extrusion_z')


class TextBase(Entity):
    '''Fields shared by the single line text and the attribute definition:
    the subclasses must define a "vert_align" field.'''
    subclass_text = fields.MarkerField('AcDbText')
    thickness     = fields.StructField(39, 'd', emit=IfNotDefault())
    x0            = fields.StructField(10, 'd')
    y0            = fields.StructField(20, 'd')
    z0            = fields.StructField(30, 'd')
    height        = fields.StructField(40, 'd', default=1.0, replace=(0.0,))
    text          = fields.StringField(1)
    rot_angle     = fields.StructField(50, 'd', emit=IfNotDefault())
    rel_x_scale   = fields.StructField(41, 'd', default=1.0, emit=IfNotDefault())
    obl_angle     = fields.StructField(51, 'd', emit=IfNotDefault())
    text_style    = fields.StringField(7, default=Default('text_style'), replace=('',), emit=IfNotDefault())
    text_flags    = fields.StructField(71, 'h', emit=IfNotDefault())
    hor_align     = fields.StructField(72, 'h', enum=HorizontalAlignment, emit=IfNotDefault())
    x1            = fields.StructField(11, 'd', emit=ALIGNMENT_POINT)
    y1            = fields.StructField(21, 'd', emit=ALIGNMENT_POINT)
    z1            = fields.StructField(31, 'd', emit=ALIGNMENT_POINT)
    extrusion_x   = fields.StructField(210, 'd', emit=EXTRUSION)
    extrusion_y   = fields.StructField(220, 'd', emit=EXTRUSION)
    extrusion_z   = fields.StructField(230, 'd', default=1.0, emit=EXTRUSION)


class Text(TextBase):
    dxf_name = 'TEXT'

    subclass_text_alignment = fields.MarkerField('AcDbText')
    vert_align              = fields.StructField(73, 'h', enum=VerticalAlignment, emit=IfNotDefault())

    def validate(self):
        if not self.text.value:
            raise RequiredFieldException('the text value is empty', chain=[self.__class__.__name__, 'text'])
