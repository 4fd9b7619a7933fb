"""
Configuration manager for OnlyConfig.

This module implements the Config class: a configuration store that
deep-merges updates, validates every result against a schema, and notifies
subscribers of the whole tree or of individual dotted keys.
"""

import copy
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from OnlyConfig.config.loader import read_config_file
from OnlyConfig.config.recovery import Recovery
from OnlyConfig.config.schema import Schema, SchemaIssue, ValidationResult, as_schema
from OnlyConfig.config.utils import deep_merge, get_path, nest_path, paths_overlap
from OnlyConfig.exceptions import ValidationError
from OnlyConfig.observable import Listener, Observable, Unsubscribe
from OnlyConfig.utils.logging import get_logger

ErrorHandler = Callable[[ValidationError], Any]


class Config:
    """
    Schema-validated configuration store with change subscriptions.

    Every mutation deep-merges a patch into the current state, validates the
    merged tree and commits the schema's normalised value. A failed
    validation leaves the state untouched.

    Features:
    - Hierarchical key access (e.g., "database.pool.size")
    - Deep merging of configuration dictionaries (lists are replaced)
    - Pluggable schema validation with an optional lenient fallback
    - Subscriptions to the whole config or to a single dotted key

    Attributes:
        _schema (Optional[Schema]): The schema descriptor, or None for no validation
        _state (Dict[str, Any]): The last committed configuration tree
        _observable (Observable): Root observable over the whole state
        _observables (Dict[str, Observable]): Per-key observables, created on first subscription
        _lock (threading.RLock): Serialises mutations
    """

    def __init__(self, schema: Any = None, initial_values: Optional[Dict[str, Any]] = None) -> None:
        """
        Create a config, validating the initial values immediately.

        Args:
            schema: A schema descriptor or pydantic model class, or None to skip validation
            initial_values: Values merged into the empty state at construction

        Raises:
            InvalidSchemaError: If ``schema`` is not a schema descriptor
            ValidationError: If ``initial_values`` do not satisfy the schema
        """
        self.logger = get_logger(__name__, {'component': 'config'})
        self._lock = threading.RLock()
        self._schema: Optional[Schema] = as_schema(schema) if schema is not None else None
        self._state: Dict[str, Any] = {}
        self._merge(initial_values or {})
        self._observable: Observable = Observable(self._state)
        self._observables: Dict[str, Observable] = {}

    @property
    def schema(self) -> Optional[Schema]:
        """The active schema descriptor."""
        return self._schema

    def _validate(self, schema: Optional[Schema], candidate: Dict[str, Any],
                  allow_unknown: bool = False) -> ValidationResult:
        if schema is None:
            return ValidationResult(candidate)
        return schema.validate(candidate, abort_early=False, allow_unknown=allow_unknown)

    def _merge(self, patch: Dict[str, Any], on_error: Optional[ErrorHandler] = None,
               base: Optional[Dict[str, Any]] = None) -> bool:
        """
        Merge ``patch`` into the state (or into ``base``) and commit if it validates.

        Args:
            patch: Values to merge
            on_error: Handler called with the ValidationError when validation fails
            base: Tree to merge into instead of the current state

        Returns:
            bool: True if a new state was committed, False if the handler rejected it

        Raises:
            ValidationError: If validation fails and there is no handler, or the
                lenient re-validation requested by the handler fails too. A
                patch that is not a mapping fails validation the same way.
        """
        if isinstance(patch, dict):
            merged = deep_merge(self._state if base is None else base, patch)
            result = self._validate(self._schema, merged)
        else:
            merged = None
            result = ValidationResult(patch, [SchemaIssue("", "Configuration update must be a mapping", "dict_type")])

        if result.ok:
            self._state = result.value
            self.logger.debug("Committed configuration update")
            return True

        error = ValidationError(result.issues)
        if on_error is None:
            raise error

        if Recovery.resolve(on_error(error)) is Recovery.REJECT:
            self.logger.info(f"Configuration update rejected by error handler: {error.message}")
            return False

        if merged is None:
            # Allowing unknown keys cannot turn a non-mapping into a configuration
            raise error
        fallback = self._validate(self._schema, merged, allow_unknown=True)
        if not fallback.ok:
            raise ValidationError(fallback.issues)
        self._state = fallback.value
        self.logger.warning(
            f"Committed configuration with unknown keys allowed after validation failure: {error.message}"
        )
        return True

    def set_schema(self, new_schema: Any, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Replace the schema, re-validating the configuration under it.

        Args:
            new_schema: The new schema descriptor or pydantic model class
            config: The configuration to adopt (defaults to the current state)

        Raises:
            InvalidSchemaError: If ``new_schema`` is not a schema descriptor
            ValidationError: If ``config`` does not satisfy ``new_schema``;
                the old schema and state are kept
        """
        schema = as_schema(new_schema)
        with self._lock:
            if config is None:
                config = self._state

            result = self._validate(schema, config)
            if not result.ok:
                raise ValidationError(result.issues)

            previous_schema = self._schema
            self._schema = schema
            try:
                self._merge(config, base={})
            except ValidationError:
                self._schema = previous_schema
                raise

            self.logger.debug(f"Schema replaced with {schema!r}")
            self._notify(None)

    def get(self, key: Optional[str] = None, default: Any = None) -> Any:
        """
        Get the whole configuration or the value at a dotted key.

        Without a key the live state tree is returned; treat it as read-only
        and use ``get_all()`` for a private copy.

        Args:
            key (str, optional): Hierarchical key using dot notation (e.g., "database.type")
            default (Any, optional): Value returned when the key is not found

        Returns:
            Any: The configuration value if found, otherwise the default value

        Examples:
            >>> config = Config(initial_values={"api": {"port": 8080}})
            >>> config.get("api.port")
            8080
            >>> config.get("api.host", "localhost")
            'localhost'
        """
        if not key:
            return self._state
        return get_path(self._state, key, default)

    def get_all(self) -> Dict[str, Any]:
        """Return a deep copy of the entire configuration."""
        return copy.deepcopy(self._state)

    def set(self, value: Any = None, key: Optional[str] = None, override: bool = False,
            on_error: Optional[ErrorHandler] = None) -> None:
        """
        Merge a value into the configuration and notify subscribers.

        A ``value`` of None is a no-op.

        Args:
            value (Any): The patch to merge, or the value to place at ``key``
            key (str, optional): Dotted key; ``value`` is nested under it before merging
            override (bool): Merge into an empty config instead of the current one
            on_error (Callable, optional): Called with the ValidationError when the
                merged config is invalid. Return ``Recovery.ALLOW_UNKNOWN`` (or a
                truthy value) to commit with unknown keys allowed, or
                ``Recovery.REJECT`` (or a falsy value) to discard the update silently.

        Raises:
            ValidationError: If validation fails and no handler recovers it

        Examples:
            >>> config.set(value=5, key="a.b")
            >>> config.get("a")
            {'b': 5}
        """
        if value is None:
            return

        patch = nest_path(key, value) if key else value
        with self._lock:
            committed = self._merge(patch, on_error, base={} if override else None)
            if committed:
                self._notify(None if override else key)

    def _notify(self, key: Optional[str]) -> None:
        # Key observables first, then the root. Values are read at dispatch time
        # so a listener that calls set() again never has its newer state overwritten.
        first_error: Optional[Exception] = None
        targets = [
            (path, observable)
            for path, observable in list(self._observables.items())
            if key is None or paths_overlap(path, key)
        ]
        targets.append((None, self._observable))

        for path, observable in targets:
            try:
                observable.set(self.get(path))
            except Exception as e:
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

    def subscribe(self, on_change: Optional[Listener] = None, key: Optional[str] = None) -> Optional[Unsubscribe]:
        """
        Subscribe to changes of the whole configuration or of one key.

        Args:
            on_change (Callable): Called with the new value after each change
            key (str, optional): Dotted key to watch; omit to watch the whole config

        Returns:
            A function that cancels the subscription, or None if ``on_change`` is missing

        Examples:
            >>> unsubscribe = config.subscribe(on_change=print, key="api.port")
            >>> config.set(value=9000, key="api.port")
            9000
            >>> unsubscribe()
        """
        if on_change is None:
            return None
        if not key:
            return self._observable.subscribe(on_change)

        with self._lock:
            observable = self._observables.get(key)
            if observable is None:
                observable = Observable(self.get(key))
                self._observables[key] = observable
        return observable.subscribe(on_change)

    def load_file(self, path: Union[str, Path], key: Optional[str] = None, override: bool = False,
                  on_error: Optional[ErrorHandler] = None) -> None:
        """
        Merge the contents of a YAML or JSON file into the configuration.

        Args:
            path: Path to the configuration file
            key, override, on_error: As for ``set``

        Raises:
            ConfigFileError: If the file cannot be read
            ValidationError: As for ``set``
        """
        self.set(value=read_config_file(path), key=key, override=override, on_error=on_error)

    def close(self) -> None:
        """Release every subscription and drop the per-key observables."""
        with self._lock:
            self._observable.clear()
            for observable in self._observables.values():
                observable.clear()
            self._observables = {}

    def __repr__(self) -> str:
        return f"Config(schema={self._schema!r}, keys={list(self._state)!r})"
