'''
Concrete record types: importing this package registers every type name
so that the reader can dispatch on it.
'''
from .comment import Comment
from .appid import AppId
from .dictionary import Dictionary
from .text import Text, HorizontalAlignment, VerticalAlignment
from .attdef import AttDef
from .arc import Arc
from .idbuffer import IdBuffer
from .layer_index import LayerIndex, LayerIndexEntry
from .proxy import ProxyEntity
