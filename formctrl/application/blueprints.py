"""Pydantic schemas for blueprint documents.

Forms are usually declared as data: a list of control blueprints, where a
nested list is an anonymous group and an object with `controls` is a named
group. Keys may be camelCase (as exported by JS front-ends) or snake_case.

Example:
    [
        {"name": "email", "type": "EMAIL", "required": true},
        {"name": "address", "controls": [
            {"name": "cep", "type": 35},
            {"name": "number", "type": "NUMBER"}
        ]}
    ]
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from formctrl.domain.collection import CtrlCollection
from formctrl.domain.enums import ControlState, ControlType
from formctrl.domain.errors import InvalidBlueprintError
from formctrl.domain.messages import DefaultMessages
from formctrl.domain.ports import DiagnosticsPort
from formctrl.domain.types import ControlProps, OptionItem
from formctrl.formats.registry import FormatRegistry


class _BlueprintModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OptionModel(_BlueprintModel):
    """Option entry of an option-bearing control."""
    name: str = Field(..., min_length=1, description="Option label")
    value: Any = Field(None, description="Value stored when selected")
    custom: bool = False
    disabled: bool = False
    inline: bool = False


class BlueprintModel(_BlueprintModel):
    """Serializable control blueprint.

    Callables (`on_change`, `interceptors`) can't travel as data and are
    attached in code after building.
    """
    name: str = Field(..., min_length=1, max_length=200, description="Control name")
    alias: str = ""
    info_text: str = ""
    description: str = ""
    label: str = ""
    autocomplete: bool = False
    value: Any = None
    disabled: bool = False
    options: List[OptionModel] = Field(default_factory=list)
    state: ControlState = ControlState.NORMAL
    placeholder: str = ""
    type: ControlType = ControlType.DEFAULT
    custom: bool = False
    custom_class: Optional[str] = None
    wrap_class: Optional[str] = None
    required: bool = False
    required_message: str = ""
    max_length: Optional[int] = Field(None, ge=0)
    max_length_message: str = ""
    min_length: Optional[int] = Field(None, ge=0)
    min_length_message: str = ""
    max_answers: Optional[int] = Field(None, ge=0)
    max_answers_message: str = ""
    min_answers: Optional[int] = Field(None, ge=0)
    min_answers_message: str = ""
    regex: Optional[str] = Field(None, description="Pattern searched in the value")
    regex_message: str = ""
    date_message: str = ""
    cnpj_message: str = ""
    cpf_message: str = ""
    pis_message: str = ""
    credit_card_message: str = ""
    email_message: str = ""
    url_message: str = ""
    cols: Optional[int] = Field(None, ge=1)
    rows: Optional[int] = Field(None, ge=1)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        """Accept member names ("CPF") besides integer codes."""
        if isinstance(v, str) and not v.strip().isdigit():
            try:
                return ControlType[v.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown control type {v!r}")
        return v

    @field_validator("regex")
    @classmethod
    def validate_regex(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error:
                raise ValueError("Invalid regex pattern")
        return v

    def to_props(self) -> ControlProps:
        """Convert into `ControlProps`, keeping only the fields the document set."""
        data = self.model_dump(exclude_unset=True)
        data["options"] = [OptionItem(**option.model_dump()) for option in self.options]
        if self.regex:
            data["regex"] = re.compile(self.regex)
        return ControlProps(**data)


class GroupModel(_BlueprintModel):
    """Named (or anonymous) group of blueprints."""
    name: Optional[str] = Field(None, max_length=200)
    controls: List[Any] = Field(..., description="Blueprints and nested groups")


@dataclass
class BlueprintGroup:
    """Parsed group: becomes a `CtrlCollection`."""
    name: Optional[str]
    entries: List[Union[ControlProps, "BlueprintGroup"]] = field(default_factory=list)


Entry = Union[ControlProps, BlueprintGroup]


def parse_blueprints(data: Any) -> BlueprintGroup:
    """
    Parse a blueprint document.

    Args:
        data: JSON text, a list of entries or a group mapping

    Returns:
        Root group of the parsed document

    Raises:
        InvalidBlueprintError: If any entry does not match the schema
    """
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidBlueprintError("document", f"Invalid JSON: {e.msg}")

    if isinstance(data, Mapping) and "controls" in data:
        return _parse_group(data, "document")
    if isinstance(data, (list, tuple)):
        return BlueprintGroup(name=None, entries=_parse_entries(data, "document"))

    raise InvalidBlueprintError("document", "Document must be a list or a group")


def build_collection(
    data: Any,
    name: Optional[str] = None,
    formats: Optional[FormatRegistry] = None,
    diagnostics: Optional[DiagnosticsPort] = None,
    messages: Optional[DefaultMessages] = None,
) -> CtrlCollection:
    """
    Build a collection from a blueprint document.

    Args:
        data: JSON text, a list of entries or a group mapping
        name: Collection name, overriding the document's group name
        formats: Format registry for the controls
        diagnostics: Diagnostics port for the collection tree
        messages: Message catalog for blank rule messages

    Returns:
        Populated collection

    Raises:
        InvalidBlueprintError: If any entry does not match the schema
    """
    root = parse_blueprints(data)
    collection = CtrlCollection(
        name or root.name,
        formats=formats,
        diagnostics=diagnostics,
        messages=messages,
    )
    _populate(collection, root.entries, formats, diagnostics, messages)
    return collection


def _populate(
    collection: CtrlCollection,
    entries: Sequence[Entry],
    formats: Optional[FormatRegistry],
    diagnostics: Optional[DiagnosticsPort],
    messages: Optional[DefaultMessages],
) -> None:
    for entry in entries:
        if isinstance(entry, BlueprintGroup):
            sub_collection = CtrlCollection(
                entry.name,
                formats=formats,
                diagnostics=diagnostics,
                messages=messages,
            )
            _populate(sub_collection, entry.entries, formats, diagnostics, messages)
            collection.add(sub_collection)
        else:
            collection.add(entry)


def _parse_entries(items: Sequence[Any], path: str) -> List[Entry]:
    entries: List[Entry] = []

    for index, item in enumerate(items):
        location = f"{path}.{index}"
        if isinstance(item, (list, tuple)):
            entries.append(BlueprintGroup(name=None, entries=_parse_entries(item, location)))
        elif isinstance(item, Mapping) and "controls" in item:
            entries.append(_parse_group(item, location))
        else:
            entries.append(_parse_blueprint(item, location))

    return entries


def _parse_group(data: Mapping[str, Any], path: str) -> BlueprintGroup:
    group = _validate(GroupModel, data, path)
    return BlueprintGroup(name=group.name, entries=_parse_entries(group.controls, f"{path}.controls"))


def _parse_blueprint(data: Any, path: str) -> ControlProps:
    return _validate(BlueprintModel, data, path).to_props()


def _validate(model, data: Any, path: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        raise InvalidBlueprintError(_location(path, error["loc"]), error["msg"])


def _location(path: str, loc: Tuple[Any, ...]) -> str:
    return ".".join([path] + [str(part) for part in loc])
