from .interface import Document, Section
from .args import Parameters
from .entities import Entry, SectionName, parse_line, strip_comment
from .type_converters.converters import TypeConverter, try_parse, format_value
from .globals import VALID_MARKERS
