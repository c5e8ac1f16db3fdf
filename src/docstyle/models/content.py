"""Structured content produced by the generative backend or the fallback parser."""

from pydantic import Field, field_validator

from .base import BaseValueModel


class Section(BaseValueModel):
    """A headed group of bullets."""

    heading: str = "Section"
    bullets: tuple[str, ...] = Field(..., min_length=1)

    @field_validator("bullets")
    @classmethod
    def bullets_not_blank(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not bullet.strip() for bullet in value):
            raise ValueError("bullets must be non-empty strings")
        return value


class ParsedContent(BaseValueModel):
    """Title, introduction and ordered sections of a composed document."""

    title: str
    intro: str = ""
    sections: tuple[Section, ...] = Field(..., min_length=1)
