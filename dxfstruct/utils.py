import datetime


# julian day number of 0001-01-01 (1721426) minus its proleptic ordinal (1)
JULIAN_ORDINAL_OFFSET = 1721425


def julian_date(when=None):
    '''Return the date as the drawing format wants it for time stamps:
    the Julian day number with the local clock time as fraction of day.'''
    if when is None:
        when = datetime.datetime.now()

    seconds = when.hour * 3600 + when.minute * 60 + when.second + when.microsecond / 1e6

    return when.toordinal() + JULIAN_ORDINAL_OFFSET + seconds / 86400.0


def julian_day(when=None):
    return int(julian_date(when))


def from_julian_date(value):
    '''Inverse of julian_date(), precise to the second.'''
    day = int(value)
    seconds = round((value - day) * 86400)

    date = datetime.datetime.fromordinal(day - JULIAN_ORDINAL_OFFSET)

    return date + datetime.timedelta(seconds=seconds)
