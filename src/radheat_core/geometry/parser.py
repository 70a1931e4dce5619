# src/radheat_core/geometry/parser.py
import hashlib
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import cerberus
import yaml

from ..units import TEMPERATURE_DIMENSIONALITY, VOLUME_DIMENSIONALITY, to_magnitude
from ..vecmath import DegenerateVector
from .exceptions import GeometryFileError, GeometrySchemaError
from .model import Body, Displacement, Geometry, Rotation, Transformation, TransformationSet

logger = logging.getLogger(__name__)

# Body labels are identifiers; transformation names only need to be free of whitespace,
# since both appear as single tokens in the output files.
LABEL_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
NAME_REGEX = r"^\S+$"


class GeometryValidator(cerberus.Validator):
    """Custom Cerberus validator adding list-uniqueness checks."""
    def __init__(self, *args, **kwargs):
        super(GeometryValidator, self).__init__(*args, **kwargs)
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(duplicates))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class GeometryParser:
    """
    Reads geometry files and transformation files into `Geometry` and
    `TransformationSet` objects, validating their structure with Cerberus.
    """
    _vector_rule = {"type": "list", "minlength": 3, "maxlength": 3, "schema": {"type": "number"}}

    _geometry_schema = {
        "name": {"type": "string", "required": False, "empty": False},
        "bodies": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "label",
            "schema": {"type": "dict", "schema": {
                "label": {"type": "string", "required": True, "regex": LABEL_REGEX},
                "position": dict(_vector_rule, required=True),
                "temperature": {"type": ["number", "string"], "required": True},
                "polarizability": {"type": ["number", "string"], "required": True},
            }},
        },
    }

    _transformation_schema = {
        "transformations": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "name",
            "schema": {"type": "dict", "schema": {
                "name": {"type": "string", "required": True, "regex": NAME_REGEX},
                "operations": {
                    "type": "list", "required": False, "default": [],
                    "schema": {"type": "dict", "schema": {
                        "body": {"type": "string", "required": True},
                        "displacement": dict(_vector_rule, excludes="rotation"),
                        "rotation": {"type": "dict", "excludes": "displacement", "schema": {
                            "axis": dict(_vector_rule, required=True),
                            "angle": {"type": "number", "required": True},
                        }},
                    }},
                },
            }},
        },
    }

    def __init__(self):
        self._geometry_validator = GeometryValidator(self._geometry_schema)
        self._geometry_validator.allow_unknown = False
        self._transformation_validator = GeometryValidator(self._transformation_schema)
        self._transformation_validator.allow_unknown = False

    def parse_geometry(self, geometry_file: Union[str, Path]) -> Geometry:
        """Parses a geometry file into a `Geometry`."""
        path = Path(geometry_file).resolve()
        logger.info(f"Reading geometry from file: {path}")
        raw_bytes = self._read_bytes(path)
        content = self._load_yaml(raw_bytes, path)
        if not self._geometry_validator.validate(content):
            raise GeometrySchemaError(self._geometry_validator.errors, path)
        document = self._geometry_validator.document

        bodies = []
        for raw_body in document["bodies"]:
            label = raw_body["label"]
            try:
                temperature = to_magnitude(raw_body["temperature"], "K", TEMPERATURE_DIMENSIONALITY)
                polarizability = to_magnitude(raw_body["polarizability"], "m**3", VOLUME_DIMENSIONALITY)
            except ValueError as e:
                raise GeometryFileError(details=f"Body '{label}': {e}", file_path=path) from e
            if temperature < 0.0:
                raise GeometryFileError(details=f"Body '{label}' has a negative temperature ({temperature} K).", file_path=path)
            bodies.append(Body(
                label=label,
                position=raw_body["position"],
                temperature_k=temperature,
                polarizability_m3=polarizability,
            ))

        geometry = Geometry(
            name=document.get("name", path.stem),
            source_file_path=path,
            bodies=tuple(bodies),
            identity=hashlib.sha256(raw_bytes).hexdigest(),
        )
        logger.info(f"Geometry '{geometry.name}' has {len(bodies)} bodies: {list(geometry.labels)}")
        return geometry

    def parse_transformations(self, transformation_file: Union[str, Path], geometry: Geometry) -> TransformationSet:
        """Parses a transformation file; every referenced body must exist in `geometry`."""
        path = Path(transformation_file).resolve()
        logger.info(f"Reading transformations from file: {path}")
        content = self._load_yaml(self._read_bytes(path), path)
        if not self._transformation_validator.validate(content):
            raise GeometrySchemaError(self._transformation_validator.errors, path)
        document = self._transformation_validator.document

        known_labels = set(geometry.labels)
        transformations = []
        for raw_trans in document["transformations"]:
            name = raw_trans["name"]
            operations = []
            for raw_op in raw_trans.get("operations", []):
                body = raw_op["body"]
                if body not in known_labels:
                    raise GeometryFileError(
                        details=f"Transformation '{name}' refers to unknown body '{body}'. Known bodies: {sorted(known_labels)}.",
                        file_path=path,
                    )
                if "displacement" in raw_op:
                    operations.append(Displacement(body=body, vector=raw_op["displacement"]))
                elif "rotation" in raw_op:
                    rot = raw_op["rotation"]
                    try:
                        operations.append(Rotation(body=body, axis=rot["axis"], angle_deg=float(rot["angle"])))
                    except DegenerateVector as e:
                        raise GeometryFileError(
                            details=f"Transformation '{name}' rotates body '{body}' about a zero-length axis.",
                            file_path=path,
                        ) from e
                else:
                    raise GeometryFileError(
                        details=f"Transformation '{name}' has an operation on body '{body}' with neither 'displacement' nor 'rotation'.",
                        file_path=path,
                    )
            transformations.append(Transformation(name=name, operations=tuple(operations)))

        logger.info(f"Read {len(transformations)} transformations from {path}.")
        return TransformationSet(transformations=tuple(transformations), source_file_path=path)

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        if not path.is_file():
            raise GeometryFileError(details=f"File not found at path: {path}", file_path=path)
        try:
            return path.read_bytes()
        except OSError as e:
            raise GeometryFileError(details=f"Could not read file: {e}", file_path=path) from e

    @staticmethod
    def _load_yaml(raw_bytes: bytes, path: Path) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(raw_bytes)
        except yaml.YAMLError as e:
            raise GeometryFileError(details=f"Invalid YAML syntax: {e}", file_path=path) from e
        if content is None:
            raise GeometryFileError(details="The file is empty or contains no valid content.", file_path=path)
        if not isinstance(content, dict):
            raise GeometryFileError(details="The root of the file must be a mapping.", file_path=path)
        return content


def load_geometry(geometry_file: Union[str, Path]) -> Geometry:
    return GeometryParser().parse_geometry(geometry_file)


def load_transformations(transformation_file: Optional[Union[str, Path]], geometry: Geometry) -> TransformationSet:
    """Loads the transformation file, or returns the single identity transformation if there is none."""
    if transformation_file is None:
        logger.info("No transformation file given; using the untransformed geometry only.")
        return TransformationSet.identity_only()
    return GeometryParser().parse_transformations(transformation_file, geometry)
