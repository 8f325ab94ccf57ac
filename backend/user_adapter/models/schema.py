"""
Live, mutable user document schema.

A schema maps top-level physical paths to ``SchemaField`` declarations.
Object containers (the profile sub-document) carry their own nested fields.
Declarations may be written shorthand: a ``FieldType`` stands for a plain
field of that type and a dict without a ``type`` key for an object container.
"""
from enum import Enum
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Value types a schema field can declare."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    OBJECT = "object"
    MIXED = "mixed"


class SchemaField(BaseModel):
    """Declaration of one document path."""
    type: FieldType = Field(default=FieldType.MIXED, description="Declared value type")
    default: Any = Field(None, description="Value applied to new documents")
    unique: bool = Field(default=False, description="Backed by a unique index")
    lowercase: bool = Field(default=False, description="Lower-case strings on write")
    trim: bool = Field(default=False, description="Strip strings on write")
    fields: Optional[dict[str, "SchemaField"]] = Field(
        None,
        description="Nested declarations of an object container"
    )

    def cast(self, value: Any) -> Any:
        """Apply the write-time string setters, recursing into containers."""
        if self.fields is not None and isinstance(value, dict):
            return {
                name: self.fields[name].cast(sub) if name in self.fields else sub
                for name, sub in value.items()
            }
        if isinstance(value, str):
            if self.trim:
                value = value.strip()
            if self.lowercase:
                value = value.lower()
        return value


FieldDeclaration = Union[SchemaField, FieldType, dict]


def as_schema_field(declaration: FieldDeclaration) -> SchemaField:
    """Normalize a shorthand declaration into a ``SchemaField``."""
    if isinstance(declaration, SchemaField):
        return declaration.model_copy(deep=True)
    if isinstance(declaration, FieldType):
        return SchemaField(type=declaration)
    if isinstance(declaration, dict):
        if "type" in declaration:
            return SchemaField(**declaration)
        return SchemaField(
            type=FieldType.OBJECT,
            fields={name: as_schema_field(sub) for name, sub in declaration.items()},
        )
    raise TypeError(f"Unsupported schema declaration: {declaration!r}")


class UserSchema:
    """Mutable schema the adapter extends before any document is used."""

    def __init__(self, fields: Optional[dict[str, FieldDeclaration]] = None):
        self.fields: dict[str, SchemaField] = {}
        if fields:
            self.add(fields)

    def __contains__(self, path: str) -> bool:
        return self.path(path) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __repr__(self) -> str:
        return f"UserSchema({list(self.fields)})"

    def path(self, path: str) -> Optional[SchemaField]:
        """Look up a declared path; dotted paths walk into object containers."""
        head, _, rest = path.partition(".")
        field = self.fields.get(head)
        while field is not None and rest:
            if not field.fields:
                return None
            head, _, rest = rest.partition(".")
            field = field.fields.get(head)
        return field

    def sub_schema(self, path: str) -> Optional[dict[str, SchemaField]]:
        """Nested declarations of an object container, if declared as one."""
        field = self.path(path)
        if field is None or field.type != FieldType.OBJECT:
            return None
        if field.fields is None:
            field.fields = {}
        return field.fields

    def add(self, fields: dict[str, FieldDeclaration]) -> None:
        """
        Declare new paths.

        Object containers that already exist are merged into: nested fields
        they lack are added, declared ones are left untouched.
        """
        for name, declaration in fields.items():
            field = as_schema_field(declaration)
            existing = self.fields.get(name)
            if existing is None:
                self.fields[name] = field
            elif existing.type == FieldType.OBJECT and field.fields:
                if existing.fields is None:
                    existing.fields = {}
                for sub_name, sub_field in field.fields.items():
                    existing.fields.setdefault(sub_name, sub_field)

    def cast(self, path: str, value: Any) -> Any:
        """Run a value through the setters of its declared path."""
        field = self.path(path)
        return field.cast(value) if field is not None else value

    def apply_defaults(self, data: dict[str, Any]) -> dict[str, Any]:
        """Fill declared defaults missing from a new document, in place."""
        for name, field in self.fields.items():
            if name not in data and field.default is not None:
                data[name] = field.default
        return data

    def unique_paths(self) -> list[str]:
        """Dotted paths that need a unique index."""
        paths = []
        for name, field in self.fields.items():
            if field.unique:
                paths.append(name)
            for sub_name, sub_field in (field.fields or {}).items():
                if sub_field.unique:
                    paths.append(f"{name}.{sub_name}")
        return paths
