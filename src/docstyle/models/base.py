"""Base models and common types for Document Style Profiler."""

from pydantic import BaseModel

HEX_COLOR_PATTERN = r"^#[0-9a-f]{6}$"

DEFAULT_FONT = "Helvetica"


class BaseValueModel(BaseModel):
    """Base class for all value objects passed between pipeline stages.

    Instances are frozen and sequences are stored as tuples, so a value can
    be handed to any downstream collaborator without risk of mutation and
    survives a JSON round trip unchanged.
    """

    class Config:
        frozen = True
