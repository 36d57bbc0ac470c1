"""Documentation building blocks shared by legacy pages and modules."""

from typing import Annotated, Any, List

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, computed_field


def _coerce_text(value: Any) -> Any:
    # YAML turns `key:` into None and `key: 42` into an int
    if value is None:
        return ""
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


def _coerce_name(value: Any) -> Any:
    value = _coerce_text(value)
    return value.strip() if isinstance(value, str) else value


def _coerce_list(value: Any) -> Any:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    return value


def _coerce_flag(value: Any) -> Any:
    return False if value is None or value == "" else value


Text = Annotated[str, BeforeValidator(_coerce_text)]
Name = Annotated[str, BeforeValidator(_coerce_name)]
TextList = Annotated[List[Text], BeforeValidator(_coerce_list)]
Flag = Annotated[bool, BeforeValidator(_coerce_flag)]


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Sample(Record):
    code: Text = ""
    media: Text = ""

    @computed_field
    @property
    def has_code_and_media(self) -> bool:
        return bool(self.code) and bool(self.media)

    @property
    def is_empty(self) -> bool:
        return not self.code and not self.media


Samples = Annotated[List[Sample], BeforeValidator(_coerce_list)]


class ContentBlock(Record):
    """One free-form section of a page (heading, paragraph, list, code...)."""

    title: Text = ""
    subtitle: Text = ""
    text: Text = ""
    list: TextList = []
    code: Text = ""
    media: Text = ""
    samples: Samples = []

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.title, self.subtitle, self.text, self.list, self.code, self.media, self.samples)
        )


class Argument(Record):
    name: Name = ""
    type: Name = ""
    description: Text = ""
    optional: Flag = False


class Value(Record):
    type: Name = ""
    description: Text = ""


class Function(Record):
    name: Name = ""
    description: Text = ""
    arguments: Annotated[List[Argument], BeforeValidator(_coerce_list)] = []
    returns: Annotated[List[Value], BeforeValidator(_coerce_list)] = Field(
        default=[], validation_alias=AliasChoices("return", "returns")
    )
    samples: Samples = []
    extended_from: Name = ""
    """Type that originally declared this function, empty when declared locally."""


class Property(Record):
    name: Name = ""
    type: Name = ""
    description: Text = ""
    read_only: Flag = Field(default=False, validation_alias=AliasChoices("read-only", "read_only"))
    samples: Samples = []
    extended_from: Name = ""
    """Type that originally declared this property, empty when declared locally."""


Blocks = Annotated[List[ContentBlock], BeforeValidator(_coerce_list)]
Functions = Annotated[List[Function], BeforeValidator(_coerce_list)]
Properties = Annotated[List[Property], BeforeValidator(_coerce_list)]


def referenced_types(functions: List[Function], properties: List[Property]) -> List[str]:
    """Return every type name mentioned by *functions* and *properties*, in order."""
    names: List[str] = []
    for prop in properties:
        names.append(prop.type)
    for func in functions:
        names.extend(arg.type for arg in func.arguments)
        names.extend(value.type for value in func.returns)
    return [n for n in dict.fromkeys(names) if n]
