"""
# Dxfstruct: tagged record ORM.

A drawing exchange file is a flat sequence of tags, each one made of two lines:
a numeric group code and the value. The group code tells which type the value
has and which role it plays in the record, a 0 code starts a new record.

A record type is described declaratively by its Field Table, i.e. its fields
in the order they must appear on the wire; from it we derive

 1. unpack(): dispatch each incoming tag to the field its code belongs to,
    up to the 0 code that closes the record and announces the next one.

 2. pack(): walk the table forward and write each field that passes its
    emission predicate (default suppression, version gate, paired fields).

A record passes through the following phases

 1. ALLOCATED: all the fields are zero
 2. INITIALIZED: the declared defaults are applied
 3. UNPACKING/PACKING
 4. DONE
 5. RELEASED: only possible if no successor is attached to it

The problems found while decoding are collected into a Report, only a broken
stream raises; the strictness can be increased with the Compliant flags.
"""
from .enum import Compliant, DxfVersion, TypeClass
from .config import Defaults, Default, DEFAULTS
from .streams import Tag, TagStream
from .core import Record
from .chain import Chain
from .diagnostics import DiagnosticKind, ReadResult, WriteResult
from .reader import RecordReader, read_records, read_chain, write_chain
from . import records
