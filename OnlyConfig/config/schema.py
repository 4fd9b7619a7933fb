"""
Schema contract for the OnlyConfig configuration system.

A schema is any object exposing::

    validate(candidate, abort_early=False, allow_unknown=False) -> ValidationResult

The result carries the normalised value (defaults applied, types coerced)
and the list of issues found. ``PydanticSchema`` adapts a pydantic model
class to this contract; other validators can subclass ``Schema``.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from OnlyConfig.exceptions import InvalidSchemaError

Location = Tuple[Union[str, int], ...]

# pydantic error type reported for keys a model does not declare (extra="forbid")
UNKNOWN_KEY_ERROR = "extra_forbidden"


class SchemaIssue:
    """A single validation failure."""

    __slots__ = ('path', 'message', 'type')

    def __init__(self, path: str, message: str, type: str = "invalid") -> None:
        self.path = path
        self.message = message
        self.type = type

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message, "type": self.type}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaIssue):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SchemaIssue(path={self.path!r}, message={self.message!r}, type={self.type!r})"


class ValidationResult:
    """Outcome of ``Schema.validate``: the normalised value and any issues found."""

    __slots__ = ('value', 'issues')

    def __init__(self, value: Any, issues: Optional[List[SchemaIssue]] = None) -> None:
        self.value = value
        self.issues = list(issues or [])

    @property
    def ok(self) -> bool:
        return not self.issues

    def __repr__(self) -> str:
        return f"ValidationResult(ok={self.ok}, issues={self.issues!r})"


class Schema(ABC):
    """Base class for schema descriptors."""

    @abstractmethod
    def validate(self, candidate: Any, abort_early: bool = False,
                 allow_unknown: bool = False) -> ValidationResult:
        """
        Validate and normalise a candidate configuration.

        Args:
            candidate: The configuration tree to check
            abort_early: Stop at the first issue instead of collecting all of them
            allow_unknown: Accept keys the schema does not declare

        Returns:
            ValidationResult with the normalised value and the issues found
        """


class PydanticSchema(Schema):
    """
    Schema backed by a pydantic model class.

    The normalised value is ``model_dump()`` of the validated model, so
    defaults and coercions declared on the model are applied. Unknown keys
    are detected through pydantic's ``extra_forbidden`` errors, which means
    models should declare ``model_config = ConfigDict(extra="forbid")``
    (nested models included) for unknown keys to be reported.

    Examples:
        >>> class Api(BaseModel):
        ...     model_config = ConfigDict(extra="forbid")
        ...     port: int = 8080
        >>> PydanticSchema(Api).validate({"port": "9000"}).value
        {'port': 9000}
    """

    def __init__(self, model: Type[BaseModel]) -> None:
        if not _is_model_class(model):
            raise InvalidSchemaError(
                f"PydanticSchema requires a pydantic BaseModel subclass, got {model!r}",
                context={"schema": repr(model)},
            )
        self.model = model

    def validate(self, candidate: Any, abort_early: bool = False,
                 allow_unknown: bool = False) -> ValidationResult:
        value, errors = self._run(candidate)

        if errors and allow_unknown:
            unknown = [tuple(error["loc"]) for error in errors if error["type"] == UNKNOWN_KEY_ERROR]
            if unknown:
                stripped, removed = _strip_locations(candidate, unknown)
                value, errors = self._run(stripped)
                if not errors:
                    for location, extra in removed:
                        _insert_at(value, location, extra)

        issues = [_to_issue(error) for error in errors]
        if abort_early:
            issues = issues[:1]
        return ValidationResult(value if not issues else None, issues)

    def _run(self, candidate: Any) -> Tuple[Any, List[Dict[str, Any]]]:
        try:
            instance = self.model.model_validate(candidate)
        except PydanticValidationError as e:
            return None, e.errors()
        return instance.model_dump(), []

    def __repr__(self) -> str:
        return f"PydanticSchema({self.model.__name__})"


def _is_model_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, BaseModel)


def is_schema(obj: Any) -> bool:
    """
    Check whether an object can act as a schema descriptor.

    Accepts ``Schema`` instances, pydantic model classes, and any other
    non-class object with a callable ``validate`` attribute.
    """
    if isinstance(obj, Schema) or _is_model_class(obj):
        return True
    if isinstance(obj, (type, BaseModel)):
        return False
    return callable(getattr(obj, 'validate', None))


def as_schema(obj: Any) -> Schema:
    """
    Return a schema descriptor for ``obj``, wrapping pydantic model classes.

    Raises:
        InvalidSchemaError: If ``obj`` does not provide the schema capability
    """
    if not is_schema(obj):
        raise InvalidSchemaError(
            f"Expected a schema descriptor with a validate() method, got {type(obj).__name__}",
            context={"schema": repr(obj)},
        )
    if _is_model_class(obj):
        return PydanticSchema(obj)
    return obj


def _to_issue(error: Dict[str, Any]) -> SchemaIssue:
    path = ".".join(str(part) for part in error.get("loc", ()))
    return SchemaIssue(path, error.get("msg", "invalid value"), error.get("type", "invalid"))


def _strip_locations(candidate: Any, locations: Sequence[Location]) -> Tuple[Any, List[Tuple[Location, Any]]]:
    """Copy ``candidate`` without the values at ``locations``; return the copy and what was removed."""
    stripped = copy.deepcopy(candidate)
    removed = []
    for location in locations:
        container = stripped
        for part in location[:-1]:
            try:
                container = container[part]
            except (KeyError, IndexError, TypeError):
                container = None
                break
        if isinstance(container, dict) and location[-1] in container:
            removed.append((location, container.pop(location[-1])))
    return stripped, removed


def _insert_at(target: Any, location: Location, value: Any) -> None:
    container = target
    for part in location[:-1]:
        if isinstance(container, dict):
            container = container.setdefault(part, {})
        elif isinstance(container, list) and isinstance(part, int) and part < len(container):
            container = container[part]
        else:
            return
    if isinstance(container, dict):
        container[location[-1]] = value
