"""
Configuration of a conversion run.

Options are declared once in OPTIONS and can be filled either directly or
from a string-keyed property source (command line, properties file) with
ConverterConfig.from_props(). Required options are checked eagerly.
"""
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional, Union

from .errors import ArgumentError
from .labels import normalize_dialect

logger = logging.getLogger(__name__)

OUTPUT_KINDS = ("derivation", "sentence", "tree")

# name -> (attribute, gloss, required)
OPTIONS = {
    "dialect": ("dialect", "Treebank dialect: japanese or english", True),
    "input": ("input_path", "Path of the treebank file (.gz allowed, - for stdin)", True),
    "output": ("output_path", "Where to write JSON lines (stdout if omitted or -)", False),
    "kind": ("output", f"What to emit per tree: {', '.join(OUTPUT_KINDS)}", False),
    "strict": ("strict", "Stop at the first malformed tree", False),
    "log": ("log_file", "Log file path", False),
    "debug": ("debug", "Enable DEBUG logging", False),
}

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


def _to_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ArgumentError(f"{key} expects a boolean, got {value!r}")


@dataclass
class ConverterConfig:
    dialect: str
    input_path: Path
    output_path: Optional[Path] = None
    output: str = "derivation"
    strict: bool = False
    log_file: Optional[Path] = None
    debug: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Normalize the dialect and paths, and check the output kind."""
        self.input_path = Path(self.input_path)
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        try:
            self.dialect = normalize_dialect(self.dialect)
        except ValueError as e:
            raise ArgumentError(str(e)) from e
        if self.output not in OUTPUT_KINDS:
            raise ArgumentError(f"kind must be one of {', '.join(OUTPUT_KINDS)}, got {self.output!r}")

    @classmethod
    def from_props(cls, props: Mapping[str, str], prefix: str = "") -> 'ConverterConfig':
        """
        Build a config from string properties.

        Args:
            props: Property source, e.g. {"dialect": "ja", "input": "train.ccgbank"}
            prefix: Optional namespace; with prefix "conv" the key "conv.dialect" is read.

        Raises:
            ArgumentError: If required options are missing or a value is invalid.
        """
        def full_name(key):
            return f"{prefix}.{key}" if prefix else key

        missing = [key for key, (_, _, required) in OPTIONS.items()
                   if required and full_name(key) not in props]
        if missing:
            usage = "\n".join(_describe_option(full_name(key), key) for key in missing)
            raise ArgumentError("Missing required option(s):\n" + usage)

        kwargs = {}
        bool_fields = {f.name for f in fields(cls) if f.type in (bool, 'bool')}
        for key, (attr, _, _) in OPTIONS.items():
            value = props.get(full_name(key))
            if value is None:
                continue
            kwargs[attr] = _to_bool(full_name(key), value) if attr in bool_fields else value
        config = cls(**kwargs)
        logger.debug(f"Loaded configuration: {config}")
        return config

    def describe(self) -> str:
        """One line per option: name, gloss, whether required, current value."""
        lines = []
        for key, (attr, _, _) in OPTIONS.items():
            lines.append(f"{_describe_option(key, key)} [{getattr(self, attr)}]")
        return "\n".join(lines)


def _describe_option(full_name: str, key: str) -> str:
    _, gloss, required = OPTIONS[key]
    suffix = " (required)" if required else ""
    return f"  {full_name:<30}: {gloss}{suffix}"


def load_props(path: Union[str, Path]) -> dict:
    """Read a properties file of "key = value" lines; '#' starts a comment."""
    props = {}
    path = Path(path)
    with path.open('r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            if '=' not in line:
                raise ArgumentError(f"{path}:{line_no}: expected 'key = value', got {line!r}")
            key, value = line.split('=', 1)
            props[key.strip()] = value.strip()
    return props
