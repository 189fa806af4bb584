import inspect
from typing import Any as TAny
from typing import Iterable, Union, cast


class Validator:
    def __init__(self, *types: type | TAny | None, **kwargs: TAny) -> None:
        self._types = tuple(_ensure_validator_instance(t) for t in types)
        self._args = kwargs
        self._default_value = self._get_default_raw_value()

    @property
    def has_default_value(self) -> bool:
        return self._default_value is not None

    def get_default_value(self) -> TAny | None:
        if self._default_value is not None:
            return (
                self._default_value()
                if callable(self._default_value)
                else self._default_value
            )
        return None

    def _get_default_raw_value(self) -> TAny | None:
        if "default" not in self._args:
            for t in self._types:
                if t is None or not isinstance(t, Validator):
                    continue

                _default = t._get_default_raw_value()
                if _default is not None:
                    return _default
            return None
        else:
            return self._args["default"]

    def validate(self, data: TAny) -> None:
        for t in self._types:
            try:
                if _validate_type(t, data):
                    return
            except InvalidTypeError:
                continue
        raise InvalidTypeError(self, None, data)

    def is_valid(self, data: TAny) -> bool:
        try:
            self.validate(data)
            return True
        except (InvalidTypeError, RequiredAttributeError, UnexpectedAttributesError):
            return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._types})"


TTypeValidator = Union[type, Validator, None]


class InvalidTypeError(Exception):
    def __init__(
        self, type: TTypeValidator, property: str | None, value: TAny | None
    ) -> None:
        super().__init__()
        self.type = type
        self.property = property
        self.value = value

    def __str__(self) -> str:
        if self.property is None:
            return f"{self.value!r} is not any of the allowed types: {self.type}"
        return f"Property '{self.property}' with value {self.value!r} is not any of the allowed types: {self.type}"


class RequiredAttributeError(Exception):
    def __init__(self, attr: str):
        super().__init__()
        self.attr = attr

    def __str__(self) -> str:
        return f"Required attribute '{self.attr}' is missing"


class UnexpectedAttributesError(Exception):
    def __init__(self, attrs: Iterable[str]):
        self.attrs = sorted(attrs)
        super().__init__(f"Unexpected attributes: {', '.join(self.attrs)}")


def _validate_type(t: TTypeValidator, data: TAny) -> bool:
    if t is None:
        return data is None
    elif t is TAny:
        return True
    elif isinstance(t, Validator):
        t.validate(data)
        return True
    elif isinstance(data, cast(type, t)):
        return True
    else:
        return False


def _validate_or_fail(t: TTypeValidator, data: TAny) -> None:
    if not _validate_type(t, data):
        raise InvalidTypeError(t, None, data)


def _ensure_validator_instance(t: TTypeValidator) -> TTypeValidator:
    """
    Ensure that if we receive an uninstanciated Validator class, we return an instance of it.
    """
    if t is None:
        return None
    elif inspect.isclass(t) and issubclass(t, Validator):
        return t()
    else:
        return t


class Str(Validator):
    def __init__(self, **kwargs: TAny) -> None:
        super().__init__(str, **kwargs)

    def __repr__(self) -> str:
        return "string"


class Int(Validator):
    def __init__(self, **kwargs: TAny) -> None:
        super().__init__(int, **kwargs)

    def validate(self, data: TAny) -> None:
        # JSON booleans decode to bool, which Python considers an int
        if isinstance(data, bool) or not isinstance(data, int):
            raise InvalidTypeError(self, None, data)

    def __repr__(self) -> str:
        return "int"


class Bool(Validator):
    def __init__(self, **kwargs: TAny) -> None:
        super().__init__(bool, **kwargs)

    def __repr__(self) -> str:
        return "bool"


class AnyType(Validator):
    def __init__(self, **kwargs: TAny) -> None:
        super().__init__(TAny, **kwargs)

    def __repr__(self) -> str:
        return "any"


class Dict(Validator):
    def __init__(
        self,
        key_schema: TTypeValidator = Str,
        value_schema: TTypeValidator = AnyType,
        **kwargs: TAny,
    ) -> None:
        super().__init__(dict, **kwargs)
        self._key_schema = _ensure_validator_instance(key_schema)
        self._value_schema = _ensure_validator_instance(value_schema)

    def validate(self, data: TAny) -> None:
        if not isinstance(data, dict):
            raise InvalidTypeError(self, None, data)

        for k, v in data.items():
            _validate_or_fail(self._key_schema, k)
            try:
                _validate_or_fail(self._value_schema, v)
            except InvalidTypeError as ex:
                raise InvalidTypeError(self._value_schema, k, v) from ex

    def __repr__(self) -> str:
        return f"dict<{repr(self._key_schema)}, {repr(self._value_schema)}>"


class Object(Validator):
    """Validates a JSON object in place.

    Missing or null properties with a default value get the default, the same
    way a decoder leaves zero values in place. With `lenient=True`, a property
    holding a value of the wrong type is replaced by its default (when it has
    one) instead of failing the whole object.
    With `fold_case=True`, keys match properties case-insensitively; when
    several keys match the same property, the last one wins.
    """

    def __init__(self, properties: dict[str, TTypeValidator], **kwargs: TAny) -> None:
        reject_extra = kwargs.pop("reject_extra", False)
        lenient = kwargs.pop("lenient", False)
        fold_case = kwargs.pop("fold_case", False)

        super().__init__(dict, **kwargs)
        self._properties = {
            k: _ensure_validator_instance(v) for k, v in properties.items()
        }
        self._reject_extra = reject_extra
        self._lenient = lenient
        self._folded_names = (
            {k.lower(): k for k in self._properties} if fold_case else None
        )

    def validate(self, data: TAny) -> None:
        if not isinstance(data, dict):
            raise InvalidTypeError(self, None, data)

        if self._folded_names is not None:
            self._fold_keys(data)

        if self._reject_extra:
            extra = set(data) - set(self._properties)
            if extra:
                raise UnexpectedAttributesError(extra)

        def ensure_property(k: str) -> bool:
            t = self._properties[k]
            if isinstance(t, Validator) and t.has_default_value:
                data[k] = t.get_default_value()
                return True
            return False

        for k, t in self._properties.items():
            if data.get(k) is None and not ensure_property(k):
                if isinstance(t, Optional):
                    continue
                if k in data:
                    raise InvalidTypeError(t, k, None)
                raise RequiredAttributeError(k)
            try:
                _validate_or_fail(t, data[k])
            except (InvalidTypeError, RequiredAttributeError) as ex:
                if self._lenient and ensure_property(k):
                    continue
                if isinstance(ex, RequiredAttributeError):
                    raise RequiredAttributeError(f"{k}.{ex.attr}") from ex
                raise InvalidTypeError(t, k, data[k]) from ex

    def _fold_keys(self, data: dict) -> None:
        names = self._folded_names or {}
        matched = {}
        for key, value in list(data.items()):
            name = names.get(key.lower()) if isinstance(key, str) else None
            if name is None:
                continue
            matched[name] = value
            if key != name:
                del data[key]
        data.update(matched)

    def __repr__(self) -> str:
        return f"object<{', '.join(f'{k}: {v}' for k, v in self._properties.items())}>"


class List(Validator):
    """Validates a JSON array in place.

    With `lenient=True`, items of the wrong type are replaced by the item
    schema's default value.
    """

    def __init__(self, item_schema: type | Validator, **kwargs: TAny) -> None:
        lenient = kwargs.pop("lenient", False)

        super().__init__(list, **kwargs)
        self._item_schema = _ensure_validator_instance(item_schema)
        self._lenient = lenient

    def validate(self, data: TAny) -> None:
        if not isinstance(data, list):
            raise InvalidTypeError(self, None, data)

        for i, item in enumerate(data):
            try:
                _validate_or_fail(self._item_schema, item)
            except InvalidTypeError:
                schema = self._item_schema
                if (
                    self._lenient
                    and isinstance(schema, Validator)
                    and schema.has_default_value
                ):
                    data[i] = schema.get_default_value()
                    continue
                raise

    def __repr__(self) -> str:
        return f"list<{repr(self._item_schema)}>"


class Optional(Validator):
    def __init__(self, *types: type | Validator, **kwargs: TAny) -> None:
        super().__init__(None, *types, **kwargs)

    def __repr__(self) -> str:
        return f"Optional<{', '.join(repr(t) for t in self._types)}>"


DefaultStringDict = Dict(Str, Str, default=dict)

TraceLines = List(Str(default=""), default=list, lenient=True)

ERROR_RECORD_SCHEMA = Object(
    {
        "error": Str,
        "stack": Str,
    }
)

EXCEPTION_RECORD_SCHEMA = Object(
    {
        "file": Str(default=""),
        "trace": TraceLines,
    },
    lenient=True,
    fold_case=True,
)

EXTRA_RECORD_SCHEMA = Object(
    {
        "class": Str(default=""),
        "line": Int(default=0),
    },
    fold_case=True,
)

OPTIONS_SCHEMA = Object(
    {
        "color": Bool(default=True),
        "truncate": Bool(default=True),
        "max_width": Int(default=0),
    },
    reject_extra=True,
    default=dict,
)

CONFIG_SCHEMA = Object(
    {
        "fields": DefaultStringDict,
        "options": OPTIONS_SCHEMA,
    },
    reject_extra=True,
)
