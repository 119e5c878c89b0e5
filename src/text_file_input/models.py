from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FileType(str, Enum):
    CSV = "CSV"
    FIXED = "FIXED"


class FileFormat(str, Enum):
    MIXED = "mixed"
    DOS = "DOS"
    UNIX = "Unix"


class FieldType(str, Enum):
    NONE = "None"
    STRING = "String"
    INTEGER = "Integer"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    BIGNUMBER = "BigNumber"
    TIMESTAMP = "Timestamp"


class TrimType(str, Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileSelector(_CamelModel):
    """One row of the step's file grid.

    Without a ``mask`` the ``name`` points at a single file; with one it is a
    directory whose children are matched against the mask.
    """

    name: str
    mask: str = ""
    exclude_mask: str = ""
    required: bool = False
    include_subfolders: bool = False
    compression: str | None = None


class ContentConfig(_CamelModel):
    file_type: FileType = FileType.CSV
    encoding: str = "UTF-8"
    file_compression: str | None = "None"
    file_format: FileFormat = FileFormat.MIXED
    separator: str = ";"
    enclosure: str = '"'
    escape_character: str = ""
    header: bool = True
    nr_header_lines: int = Field(default=1, ge=0)


class BaseFileField(_CamelModel):
    name: str = ""
    position: int = -1
    length: int = -1
    precision: int = -1
    type: FieldType = FieldType.STRING
    format: str = ""
    currency_symbol: str = ""
    decimal_symbol: str = ""
    group_symbol: str = ""
    null_string: str = ""
    if_null_value: str = ""
    trim_type: TrimType = TrimType.NONE
    repeated: bool = False

    @property
    def end(self) -> int:
        return self.position + max(self.length, 0)


class StepConfig(_CamelModel):
    name: str = ""
    files: list[FileSelector] = Field(default_factory=list)
    content: ContentConfig = Field(default_factory=ContentConfig)
    input_fields: list[BaseFileField] = Field(default_factory=list)


class SynthesizedField(BaseModel):
    """A column descriptor as the step dialog's field grid expects it."""

    name: str
    position: int
    length: int
    precision: int = -1
    type: str
    format: str = ""
    currency: str = ""
    decimal: str = ""
    group: str = ""
    nullif: str = ""
    ifnull: str = ""
    trim_type: str = Field(default=TrimType.NONE.value, serialization_alias="trimType")
    repeat: bool = False

    @classmethod
    def from_field(cls, field: BaseFileField) -> SynthesizedField:
        return cls(
            name=field.name,
            position=field.position,
            length=field.length,
            precision=field.precision,
            type=field.type.value,
            format=field.format,
            currency=field.currency_symbol,
            decimal=field.decimal_symbol,
            group=field.group_symbol,
            nullif=field.null_string,
            ifnull=field.if_null_value,
            trim_type=field.trim_type.value,
            repeat=field.repeated,
        )


class ResolvedFile(BaseModel):
    uri: str
    compression: str | None = None


class FileSample(BaseModel):
    uri: str
    lines: list[str] = Field(default_factory=list)
