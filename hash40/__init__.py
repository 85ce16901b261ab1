from .classes import Hash40 as Hash40
from .classes import hash40 as hash40
from .const import VERSION
from .const import LoaderConf as LoaderConf
from .errors import HexParseError as HexParseError
from .errors import LabelNotFoundError as LabelNotFoundError
from .errors import MissingPrefixError as MissingPrefixError
from .errors import ParseHashError as ParseHashError
from .label_map import LabelMap as LabelMap
from .label_map import LabelMode as LabelMode
from .label_map import default_label_map as default_label_map
from .stream import read_hash40 as read_hash40
from .stream import read_hash40_with_meta as read_hash40_with_meta
from .stream import write_hash40 as write_hash40
from .stream import write_hash40_with_meta as write_hash40_with_meta

__version__ = VERSION
