"""Rich document model — the structured text produced by the editing surface.

Spans are flat: each one carries its own style flags and at most one of a
link target or a reference. References are a tagged union so the renderer
never has to recognise its own token syntax.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class UserMention(BaseModel):
    kind: Literal["user"] = "user"
    id: str


class ChannelReference(BaseModel):
    kind: Literal["channel"] = "channel"
    id: str


Reference = Annotated[UserMention | ChannelReference, Field(discriminator="kind")]


class Span(BaseModel):
    """A run of text with flattened styling."""

    text: str = ""
    bold: bool = False
    italic: bool = False
    strike: bool = False
    code: bool = False
    link: str | None = None
    reference: Reference | None = None


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    spans: list[Span] = Field(default_factory=list)


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(default=1, ge=1, le=3)
    spans: list[Span] = Field(default_factory=list)


class Quote(BaseModel):
    kind: Literal["quote"] = "quote"
    spans: list[Span] = Field(default_factory=list)


class ListBlock(BaseModel):
    kind: Literal["list"] = "list"
    ordered: bool = False
    indent: int = Field(default=0, ge=0)
    items: list[list[Span]] = Field(default_factory=list)


Block = Annotated[Paragraph | Heading | Quote | ListBlock, Field(discriminator="kind")]


class RichDocument(BaseModel):
    blocks: list[Block] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> RichDocument:
        """Wrap plain text in a single paragraph."""
        if not text:
            return cls()
        return cls(blocks=[Paragraph(spans=[Span(text=text)])])
