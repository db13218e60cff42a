"""
Core models for the H3C supplicant.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from ..const import MAX_USERNAME_LENGTH
from .status import StatusCode


class SessionConfig(BaseModel):
    """
    Identity materials and output sink for a single authentication session.
    """

    model_config = ConfigDict(frozen=True, revalidate_instances="always")

    interface: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: SecretStr
    output: Callable[[StatusCode], None]

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("username must not contain NUL bytes")
        if len(value.encode("utf-8")) > MAX_USERNAME_LENGTH:
            raise ValueError(
                f"username must not exceed {MAX_USERNAME_LENGTH} bytes"
            )
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: SecretStr) -> SecretStr:
        secret = value.get_secret_value()
        if not secret:
            raise ValueError("password must not be empty")
        if "\x00" in secret:
            raise ValueError("password must not contain NUL bytes")
        return value

    @property
    def username_bytes(self) -> bytes:
        """
        Returns the username as sent on the wire.
        """
        return self.username.encode("utf-8")

    @property
    def password_bytes(self) -> bytes:
        """
        Returns the raw password bytes used in challenge transcripts.
        """
        return self.password.get_secret_value().encode("utf-8")
