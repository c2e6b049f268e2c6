from .encoding import encode, format_duration, format_float, parse_duration
from .errors import ConsumerError, EncodingError, ParseError, TomlflagsError
from .filters import SkipSet, should_skip
from .flatten import flatten, iter_pairs, visit
from .parser import Parser, parse
from .paths import build_key
from .types import FlatPair, FlattenOptions

__all__ = [
    "ConsumerError",
    "EncodingError",
    "FlatPair",
    "FlattenOptions",
    "ParseError",
    "Parser",
    "SkipSet",
    "TomlflagsError",
    "build_key",
    "encode",
    "flatten",
    "format_duration",
    "format_float",
    "iter_pairs",
    "parse",
    "parse_duration",
    "should_skip",
    "visit",
]
