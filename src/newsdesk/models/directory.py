"""Directory lookup results for chat-platform users."""

from __future__ import annotations

from pydantic import BaseModel


class DisplayInfo(BaseModel):
    user_id: str
    name: str
    display_name: str = ""
    real_name: str = ""
    image_url: str | None = None

    @property
    def label(self) -> str:
        """Best human-readable name for the user."""
        return self.display_name or self.real_name or self.name
