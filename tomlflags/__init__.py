"""tomlflags - configuration files as command line flags.

Decode TOML (or YAML) documents into an ordered sequence of flat
key/value string pairs that a flag parser can consume.
"""

from .core.errors import ConsumerError, EncodingError, ParseError, TomlflagsError
from .core.filters import SkipSet, should_skip
from .core.flatten import flatten, iter_pairs, visit
from .core.parser import Parser, parse
from .core.types import FlatPair, FlattenOptions

__all__ = [
    "ConsumerError",
    "EncodingError",
    "FlatPair",
    "FlattenOptions",
    "ParseError",
    "Parser",
    "SkipSet",
    "TomlflagsError",
    "flatten",
    "iter_pairs",
    "parse",
    "should_skip",
    "visit",
]
