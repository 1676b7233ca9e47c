from .interface import Configuration, parse, read_config
from .args import Parameters
from .entities import Entry, Group, RawLine, with_order, ordered_value
from .globals import VALID_MARKERS
