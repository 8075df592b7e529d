from enum import Enum, Flag, IntEnum, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE    = 0
    ENUM    = 1 << 0
    MARKER  = 1 << 1
    VALUE   = 1 << 2
    UNKNOWN = 1 << 3
    VERSION = 1 << 4
    INHERIT = 1 << 5
    STRICT  = ENUM | MARKER | VALUE | UNKNOWN | VERSION


class DxfVersion(IntEnum):
    '''Drawing exchange revisions, named after the $ACADVER string.

    The integer value is what the version gates compare against.'''
    MC0_0  = 0
    AC1_2  = 120
    AC1_40 = 140
    AC1_50 = 150
    AC2_10 = 210
    AC2_21 = 221
    AC2_22 = 222
    AC1001 = 1001
    AC1002 = 1002
    AC1003 = 1003
    AC1004 = 1004
    AC1006 = 1006
    AC1009 = 1009
    AC1012 = 1012
    AC1014 = 1014
    AC1015 = 1015
    AC1016 = 1016
    AC1017 = 1017
    AC1018 = 1018
    AC1019 = 1019
    AC1020 = 1020
    AC1021 = 1021
    AC1022 = 1022
    AC1023 = 1023
    AC1024 = 1024
    AC1025 = 1025
    AC1026 = 1026
    AC1027 = 1027

    # release names
    R10   = 1006
    R11   = 1009
    R12   = 1009
    R13   = 1012
    R14   = 1014
    R2000 = 1015
    R2004 = 1018
    R2007 = 1021
    R2010 = 1024
    R2013 = 1027

    @classmethod
    def from_acadver(cls, name):
        '''Map the $ACADVER header string (e.g. "AC1015") to a member.'''
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f'unknown drawing version {name!r}')

    @property
    def acadver(self):
        return self.name


class TypeClass(Enum):
    '''Semantic type of the value following a group code.'''
    STRING  = auto()
    COMMENT = auto()
    MARKER  = auto()
    HANDLE  = auto()
    INT16   = auto()
    INT32   = auto()
    INT64   = auto()
    BOOL    = auto()
    DOUBLE  = auto()
    FLOAT   = auto()
    BINARY  = auto()
