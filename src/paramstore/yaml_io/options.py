"""Formatting options of the YAML emitter."""

from pydantic import BaseModel, ConfigDict, Field

# Effectively disables line folding; PyYAML wraps at 80 columns otherwise
NO_LINE_WRAP = 2**31 - 1


class EmitterOptions(BaseModel):
    """Emitter formatting policy.

    The defaults are the canonical format: 4-space indent, block-style maps,
    flow-style sequences and no line wrapping. Output written with the
    defaults re-reads to the same parameters and re-writes byte-identically.
    """

    model_config = ConfigDict(frozen=True)

    indent: int = Field(default=4, ge=2, le=9)
    width: int = Field(default=NO_LINE_WRAP, gt=20)
    flow_sequences: bool = True
    allow_unicode: bool = True


CANONICAL = EmitterOptions()
