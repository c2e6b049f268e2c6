"""Apply flattened configuration pairs to argparse parsers."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .core.errors import ConsumerError
from .core.parser import Parser
from .core.types import FlattenOptions
from .sources import loader_for

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "t", "true", "y", "yes", "on"}
_FALSE_STRINGS = {"0", "f", "false", "n", "no", "off"}

# nargs values under which one config pair contributes one list item
_MULTI_NARGS = {argparse.ZERO_OR_MORE, argparse.ONE_OR_MORE}


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean value {value!r}")


class ArgparseConsumer:
    """Callback that sets argparse destinations from flat pairs.

    A flat key is matched against each action's long option string
    (``--key``) and then against its ``dest``. Values are converted with
    the action's ``type`` and checked against its ``choices``. Repeated
    keys accumulate for ``append`` actions and list-valued ``nargs``.
    """

    def __init__(
        self,
        parser: argparse.ArgumentParser,
        namespace: Optional[argparse.Namespace] = None,
    ):
        self.parser = parser
        self.namespace = namespace if namespace is not None else argparse.Namespace()
        self._by_option: Dict[str, argparse.Action] = {}
        self._by_dest: Dict[str, argparse.Action] = {}
        for action in parser._actions:
            for option in action.option_strings:
                self._by_option[option] = action
            if action.dest is not argparse.SUPPRESS:
                self._by_dest.setdefault(action.dest, action)

    def _find(self, key: str) -> Optional[argparse.Action]:
        action = self._by_option.get(f"--{key}")
        if action is None and len(key) == 1:
            action = self._by_option.get(f"-{key}")
        if action is None:
            action = self._by_dest.get(key)
        return action

    def _convert(self, action: argparse.Action, key: str, value: str) -> Any:
        convert = action.type if action.type is not None else str
        if not callable(convert):
            raise ConsumerError(f"flag {key!r} has an unusable type {convert!r}", key)
        try:
            converted = convert(value)
        except (TypeError, ValueError, argparse.ArgumentTypeError) as e:
            raise ConsumerError(f"invalid value {value!r} for flag {key!r}: {e}", key) from e
        if action.choices is not None and converted not in action.choices:
            raise ConsumerError(
                f"invalid value {value!r} for flag {key!r}: "
                f"choose from {', '.join(map(repr, action.choices))}",
                key,
            )
        return converted

    def _append(self, dest: str, item: Any) -> None:
        items: List[Any] = list(getattr(self.namespace, dest, None) or [])
        items.append(item)
        setattr(self.namespace, dest, items)

    def __call__(self, key: str, value: str) -> None:
        action = self._find(key)
        if action is None:
            raise ConsumerError(f"config key {key!r} does not match any flag", key)
        dest = action.dest

        if isinstance(action, argparse._StoreConstAction):
            try:
                enabled = parse_bool(value)
            except ValueError as e:
                raise ConsumerError(f"invalid value {value!r} for flag {key!r}: {e}", key) from e
            setattr(self.namespace, dest, action.const if enabled else action.default)
        elif isinstance(action, argparse.BooleanOptionalAction):
            try:
                setattr(self.namespace, dest, parse_bool(value))
            except ValueError as e:
                raise ConsumerError(f"invalid value {value!r} for flag {key!r}: {e}", key) from e
        elif isinstance(action, argparse._CountAction):
            try:
                setattr(self.namespace, dest, int(value))
            except ValueError as e:
                raise ConsumerError(f"invalid count {value!r} for flag {key!r}", key) from e
        elif isinstance(action, argparse._AppendAction):
            self._append(dest, self._convert(action, key, value))
        elif isinstance(action, argparse._StoreAction):
            converted = self._convert(action, key, value)
            if action.nargs in _MULTI_NARGS or isinstance(action.nargs, int):
                self._append(dest, converted)
            else:
                setattr(self.namespace, dest, converted)
        else:
            raise ConsumerError(
                f"flag {key!r} uses {type(action).__name__}, which cannot be set from config",
                key,
            )
        logger.debug("Set %s from config", dest)


def parse_args(
    parser: argparse.ArgumentParser,
    args: Optional[Sequence[str]] = None,
    config_file: Optional[Union[str, Path]] = None,
    options: Optional[FlattenOptions] = None,
    namespace: Optional[argparse.Namespace] = None,
) -> argparse.Namespace:
    """Parse command line arguments with defaults taken from a config file.

    Config values are applied first; values given on the command line
    replace them. Command line values for ``append`` flags are added
    after the config values, the same way argparse extends list
    defaults.

    Args:
        parser: Parser whose flags the config keys refer to.
        args: Command line arguments (``sys.argv[1:]`` when None).
        config_file: Optional TOML or YAML file to read.
        options: Delimiter and skip configuration for the config file.
        namespace: Optional namespace to populate.

    Returns:
        The populated namespace.

    Raises:
        ParseError: If the config file is malformed.
        EncodingError: If a config value cannot be flattened.
        ConsumerError: If a config key or value is rejected.
    """
    ns = namespace if namespace is not None else argparse.Namespace()
    if config_file is not None:
        consumer = ArgparseConsumer(parser, ns)
        Parser(options, loader=loader_for(config_file)).parse_file(config_file, consumer)
    return parser.parse_args(args, namespace=ns)
