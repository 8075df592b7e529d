import datetime

import pytest

from dxfstruct.config import Default, Defaults, DEFAULTS
from dxfstruct.enum import DxfVersion
from dxfstruct.utils import julian_date, julian_day, from_julian_date


def test_julian_date():
    assert julian_date(datetime.datetime(2000, 1, 1)) == 2451545.0
    assert julian_date(datetime.datetime(2000, 1, 1, 12)) == 2451545.5
    assert julian_day(datetime.datetime(2000, 1, 1, 23, 59)) == 2451545


def test_from_julian_date():
    when = datetime.datetime(2021, 3, 4, 5, 6, 7)

    assert from_julian_date(julian_date(when)) == when


def test_defaults():
    defaults = Defaults(layer='WALLS')

    assert defaults.layer == 'WALLS'
    assert defaults.linetype == DEFAULTS.linetype
    assert Default('layer').resolve(defaults) == 'WALLS'

    with pytest.raises(AttributeError):
        Defaults(kebab='0')

    with pytest.raises(AttributeError):
        Default('kebab')


def test_versions():
    assert DxfVersion.from_acadver('AC1015') == DxfVersion.R2000
    assert DxfVersion.from_acadver('ac1009') == DxfVersion.R12
    assert DxfVersion.AC1015.acadver == 'AC1015'
    assert DxfVersion.AC1009 < DxfVersion.AC1012

    with pytest.raises(ValueError):
        DxfVersion.from_acadver('AC0000')
