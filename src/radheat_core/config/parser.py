# src/radheat_core/config/parser.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from .exceptions import OptionFileError, OptionSchemaError

logger = logging.getLogger(__name__)


def _listify(value: Any) -> Any:
    """Lets repeatable options be written as a single scalar in the option file."""
    if value is None or isinstance(value, list):
        return value
    return [value]


class OptionValidator(cerberus.Validator):
    """Cerberus validator with the extra rules used by the option schema."""
    def __init__(self, *args, **kwargs):
        super(OptionValidator, self).__init__(*args, **kwargs)
        self.rules['path_string'] = {'schema': {'type': 'boolean'}}

    def _validate_path_string(self, constraint: bool, field: str, value: Any):
        """
        Rejects blank paths and paths containing NUL characters.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        if not value.strip():
            self._error(field, "must be a non-blank file path.")
        elif "\x00" in value:
            self._error(field, f"Path '{value!r}' contains a NUL character.")


class OptionFileParser:
    """
    Reads a YAML option file into a normalized option mapping.

    The option names are those of `RunConfig`; a few short aliases from the
    command line (`transfile`, `omega`, `read_cache`, `nthread`) are renamed to
    their canonical names. Repeatable options accept a scalar or a list.
    """
    _path_rule = {"type": "string", "nullable": True, "path_string": True}
    _freq_rule = {"type": ["string", "number"], "nullable": True}

    _schema = {
        # Aliases
        "transfile": {"rename": "transformation_file"},
        "omega": {"rename": "omega_values"},
        "read_cache": {"rename": "read_caches"},
        "nthread": {"rename": "n_thread"},
        # Geometry
        "geometry": _path_rule,
        "transformation_file": _path_rule,
        # Frequencies
        "omega_values": {"type": "list", "coerce": _listify, "schema": {"type": ["string", "number"]}},
        "omega_file": _path_rule,
        "omega_min": _freq_rule,
        "omega_max": _freq_rule,
        # Output
        "output_file": _path_rule,
        "by_omega_file": _path_rule,
        "plot_flux": {"type": "boolean"},
        "log_file": _path_rule,
        # Caches
        "cache": _path_rule,
        "read_caches": {"type": "list", "coerce": _listify, "schema": {"type": "string", "path_string": True}},
        "write_cache": _path_rule,
        # Evaluation
        "n_thread": {"type": "integer", "min": 0},
        "evaluator": {"type": "string", "empty": False},
        "continue_on_failure": {"type": "boolean"},
    }

    def __init__(self):
        self._validator = OptionValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("OptionFileParser initialized.")

    def parse(self, option_file: Union[str, Path]) -> Dict[str, Any]:
        """Loads, validates and normalizes one option file."""
        path = Path(option_file).resolve()
        logger.info(f"Reading options from file: {path}")
        content = self._load_yaml(path)
        return self.normalize(content, source=path)

    def normalize(self, options: Dict[str, Any], source: Optional[Path] = None) -> Dict[str, Any]:
        """Validates an in-memory option mapping against the same schema."""
        if not self._validator.validate(options):
            raise OptionSchemaError(self._validator.errors, source or Path("<options>"))
        document = self._validator.document
        return {k: v for k, v in document.items() if v is not None}

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        if not source.is_file():
            raise OptionFileError(details=f"Option file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise OptionFileError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise OptionFileError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise OptionFileError(details="The root of the option file must be a mapping.", file_path=source)
        return content


def merge_options(file_options: Dict[str, Any], cli_options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlays command-line options on option-file options. A command-line value
    wins whenever it was actually given: `None`, `False` and empty lists count
    as "not given".
    """
    merged = dict(file_options)
    for key, value in cli_options.items():
        if value is None or value is False or (isinstance(value, (list, tuple)) and not value):
            continue
        merged[key] = value
    overridden = sorted(k for k in cli_options if k in file_options and merged[k] is cli_options[k])
    if overridden:
        logger.info(f"Command-line values take precedence for: {overridden}")
    return merged
