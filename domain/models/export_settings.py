"""
User-facing export configuration for Markdown notes.

Tags and YAML keys are written into frontmatter unquoted, so both are
restricted to characters that stay plain YAML scalars.
"""

import re
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

_YAML_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")
_TAG = re.compile(r"^#[\w/\-]+$")


class YamlMapping(BaseModel):
    """
    Maps logical frontmatter fields to the literal YAML keys the user wants.

    ``volume`` is kept for compatibility with stored settings; the exporter
    emits per-exercise volume keys instead of a single aggregate.
    """

    date: str = Field(default="date", min_length=1)
    type: str = Field(default="workout_type", min_length=1)
    duration: str = Field(default="duration", min_length=1)
    volume: str = Field(default="total_volume", min_length=1)
    tags: str = Field(default="tags", min_length=1)

    @field_validator("date", "type", "duration", "volume", "tags")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys are letters, digits, '_' and '-', not starting with a digit."""
        v = v.strip()
        if not _YAML_KEY.match(v):
            raise ValueError(f"Invalid frontmatter key: {v!r}")
        return v


def parse_tags(text: str) -> List[str]:
    """
    Parse a comma separated tag string, keeping only ``#``-prefixed tags.

    Examples:
        >>> parse_tags("#workout, gym, #lifting/upper")
        ['#workout', '#lifting/upper']
    """
    return [t.strip() for t in text.split(",") if t.strip().startswith("#")]


class ExportSettings(BaseModel):
    """
    Settings consumed by the Markdown exporter and volume calculator.

    ``tags`` accepts a list or the comma separated text typed into the
    settings form.

    Examples:
        >>> settings = ExportSettings(tags="#workout, gym", user_bodyweight=180)
        >>> settings.tags
        ['#workout']
        >>> settings.yaml_mapping.duration
        'duration'
    """

    yaml_mapping: YamlMapping = Field(default_factory=YamlMapping)
    tags: List[str] = Field(default_factory=lambda: ["#workout/gym"])
    user_bodyweight: Optional[float] = Field(
        default=None,
        gt=0,
        description="Body weight used for bodyweight exercise volume",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def split_tag_text(cls, v: Union[str, List[str]]):
        if isinstance(v, str):
            return parse_tags(v)
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        """Every tag is '#' followed by letters, digits, '_', '-' or '/'."""
        tags = [tag.strip() for tag in v if tag.strip()]
        invalid = [tag for tag in tags if not _TAG.match(tag)]
        if invalid:
            raise ValueError(f"Tags must be '#' followed by letters, digits, '_', '-' or '/': {invalid}")
        return tags

    @field_validator("user_bodyweight", mode="before")
    @classmethod
    def blank_bodyweight_to_none(cls, v):
        # Unset bodyweight is stored as null, 0 or ""
        if v in (None, "", 0):
            return None
        return v
