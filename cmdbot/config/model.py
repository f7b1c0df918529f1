from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BotConfig(BaseModel):
    """Connection settings read from ``config.ini``.

    Attributes:
        nick: Bot account login name.
        password: OAuth token, stored with an ``oauth:`` prefix.
        channel: Channel to join, stored lowercase with a leading '#'.
    """

    model_config = ConfigDict(populate_by_name=True)

    nick: str = Field(min_length=1)
    password: str = Field(alias="pass", min_length=1)
    channel: str = Field(min_length=1)

    @field_validator("nick", mode="before")
    @classmethod
    def normalize_nick(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("password", mode="before")
    @classmethod
    def normalize_password(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if v and not v.startswith("oauth:"):
            v = f"oauth:{v}"
        return v

    @field_validator("channel", mode="before")
    @classmethod
    def normalize_channel(cls, v: Any) -> Any:
        """Lowercase and ensure exactly one leading '#'."""
        if not isinstance(v, str):
            return v
        stripped = v.strip().lstrip("#").lower()
        return f"#{stripped}" if stripped else ""
