# Syncctl Context Keys
# Declarative availability predicates over named context values

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, Optional, Protocol, TypeVar

from syncctl.utils.event import Emitter, Event
from syncctl.utils.lifecycle import Disposable

if TYPE_CHECKING:
    from syncctl.config.service import ConfigurationChangeEvent, ConfigurationService

CONFIG_PREFIX = "config."

T = TypeVar("T")


class Context(Protocol):
    """Read access to context values."""

    def get_value(self, key: str) -> Any: ...


class MappingContext:
    """Context backed by a plain mapping."""

    def __init__(self, values: Mapping[str, Any]):
        self._values = dict(values)

    def get_value(self, key: str) -> Any:
        return self._values.get(key)


class ContextKeyExpr(ABC):
    """Boolean expression over context keys."""

    @abstractmethod
    def evaluate(self, context: Context) -> bool: ...

    @abstractmethod
    def serialize(self) -> str: ...

    @abstractmethod
    def keys(self) -> set[str]:
        """Context keys the expression reads."""

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.serialize()}>"

    @staticmethod
    def has(key: str) -> "ContextKeyExpr":
        return _HasExpr(key)

    @staticmethod
    def not_(key: str) -> "ContextKeyExpr":
        return _NotExpr(key)

    @staticmethod
    def equals(key: str, value: Any) -> "ContextKeyExpr":
        return _EqualsExpr(key, value)

    @staticmethod
    def not_equals(key: str, value: Any) -> "ContextKeyExpr":
        return _NotEqualsExpr(key, value)

    @staticmethod
    def and_(*exprs: Optional["ContextKeyExpr"]) -> "ContextKeyExpr":
        flattened: list[ContextKeyExpr] = []
        for expr in exprs:
            if expr is None:
                continue
            if isinstance(expr, _AndExpr):
                flattened.extend(expr.exprs)
            else:
                flattened.append(expr)
        if len(flattened) == 1:
            return flattened[0]
        return _AndExpr(tuple(flattened))


def _format_value(value: Any) -> str:
    return f"'{getattr(value, 'value', value)}'"


def _normalize(value: Any) -> Any:
    # str enums compare equal to their value, plain enums do not
    return getattr(value, "value", value)


class _HasExpr(ContextKeyExpr):
    def __init__(self, key: str):
        self.key = key

    def evaluate(self, context: Context) -> bool:
        return bool(context.get_value(self.key))

    def serialize(self) -> str:
        return self.key

    def keys(self) -> set[str]:
        return {self.key}


class _NotExpr(ContextKeyExpr):
    def __init__(self, key: str):
        self.key = key

    def evaluate(self, context: Context) -> bool:
        return not context.get_value(self.key)

    def serialize(self) -> str:
        return f"!{self.key}"

    def keys(self) -> set[str]:
        return {self.key}


class _EqualsExpr(ContextKeyExpr):
    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value

    def evaluate(self, context: Context) -> bool:
        return _normalize(context.get_value(self.key)) == _normalize(self.value)

    def serialize(self) -> str:
        return f"{self.key} == {_format_value(self.value)}"

    def keys(self) -> set[str]:
        return {self.key}


class _NotEqualsExpr(_EqualsExpr):
    def evaluate(self, context: Context) -> bool:
        return not super().evaluate(context)

    def serialize(self) -> str:
        return f"{self.key} != {_format_value(self.value)}"


class _AndExpr(ContextKeyExpr):
    def __init__(self, exprs: tuple[ContextKeyExpr, ...]):
        self.exprs = exprs

    def evaluate(self, context: Context) -> bool:
        return all(expr.evaluate(context) for expr in self.exprs)

    def serialize(self) -> str:
        return " && ".join(expr.serialize() for expr in self.exprs)

    def keys(self) -> set[str]:
        result: set[str] = set()
        for expr in self.exprs:
            result |= expr.keys()
        return result


class ContextKeyChangeEvent:
    """Names the context keys whose value may have changed."""

    def __init__(self, keys: Iterable[str]):
        self.keys = frozenset(keys)

    def affects_some(self, keys: Iterable[str]) -> bool:
        return bool(self.keys & set(keys))


class ContextKeyService(Disposable):
    """
    Stores context values and resolves ``config.*`` keys live.

    Values under the ``config.`` prefix are never stored; they are read
    from the configuration service at evaluation time.
    """

    def __init__(self, configuration_service: Optional["ConfigurationService"] = None):
        super().__init__()
        self._values: dict[str, Any] = {}
        self._configuration_service = configuration_service
        self._on_did_change_context: Emitter[ContextKeyChangeEvent] = self._register(Emitter())
        if configuration_service is not None:
            self._register(configuration_service.on_did_change_configuration(self._on_configuration_change))

    @property
    def on_did_change_context(self) -> Event[ContextKeyChangeEvent]:
        return self._on_did_change_context.event

    def get_value(self, key: str) -> Any:
        if key.startswith(CONFIG_PREFIX):
            if self._configuration_service is None:
                return None
            return self._configuration_service.get_value(key[len(CONFIG_PREFIX) :])
        return self._values.get(key)

    def set_value(self, key: str, value: Any) -> None:
        if key.startswith(CONFIG_PREFIX):
            raise ValueError(f"'{key}' is read from configuration and cannot be set")
        if key in self._values and self._values[key] == value:
            return
        self._values[key] = value
        self._on_did_change_context.fire(ContextKeyChangeEvent([key]))

    def remove_value(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._on_did_change_context.fire(ContextKeyChangeEvent([key]))

    def context_matches(self, expr: Optional[ContextKeyExpr]) -> bool:
        """Evaluate expr against current values. No expression always matches."""
        if expr is None:
            return True
        return expr.evaluate(self)

    def create_key(self, key: str, default: T) -> "ContextKey[T]":
        return ContextKey(self, key, default)

    def _on_configuration_change(self, event: "ConfigurationChangeEvent") -> None:
        self._on_did_change_context.fire(
            ContextKeyChangeEvent(CONFIG_PREFIX + key for key in event.affected_keys)
        )


class ContextKey(Generic[T]):
    """A context key bound to a service."""

    def __init__(self, service: ContextKeyService, key: str, default: T):
        self._service = service
        self.key = key
        self._default = default
        self.reset()

    def set(self, value: T) -> None:
        self._service.set_value(self.key, value)

    def get(self) -> T:
        return self._service.get_value(self.key)

    def reset(self) -> None:
        self._service.set_value(self.key, self._default)


class RawContextKey(Generic[T]):
    """Declared context key, usable in expressions before being bound."""

    def __init__(self, key: str, default: T):
        self.key = key
        self.default = default

    def bind_to(self, service: ContextKeyService) -> ContextKey[T]:
        return service.create_key(self.key, self.default)

    def is_equal_to(self, value: Any) -> ContextKeyExpr:
        return ContextKeyExpr.equals(self.key, value)

    def not_equals_to(self, value: Any) -> ContextKeyExpr:
        return ContextKeyExpr.not_equals(self.key, value)


class ResourceContextKey:
    """Context keys describing the active editor's resource."""

    Scheme: RawContextKey[Optional[str]] = RawContextKey("resourceScheme", None)
