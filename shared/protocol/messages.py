from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from shared.cipher import ALPHABET, Mode, is_valid, transform

from .constants import ENCODING
from .errors import ContentError


class CipherRequest(BaseModel):
    """Text and key payloads of one session, checked before the transform runs."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Ciphertext or plaintext symbols")
    key: str = Field(..., description="Key symbols, at least as long as text")

    @field_validator("text", "key")
    @classmethod
    def check_alphabet(cls, value: str) -> str:
        if not is_valid(value):
            bad = sorted({ch for ch in value if ch not in ALPHABET})
            raise ValueError(f"contains symbols outside the alphabet: {bad!r}")
        return value

    @model_validator(mode="after")
    def check_key_length(self) -> "CipherRequest":
        if len(self.key) < len(self.text):
            raise ValueError(f"key is too short ({len(self.key)} < {len(self.text)})")
        return self

    @classmethod
    def build(cls, text: str, key: str) -> "CipherRequest":
        try:
            return cls(text=text, key=key)
        except ValidationError as exc:
            raise ContentError(f"Request validation failed: {exc}") from exc

    @classmethod
    def from_frames(cls, text: bytes, key: bytes) -> "CipherRequest":
        try:
            return cls.build(text.decode(ENCODING), key.decode(ENCODING))
        except UnicodeDecodeError as exc:
            raise ContentError(f"Payload is not {ENCODING}: {exc}") from exc

    def apply(self, mode: Mode) -> str:
        return transform(mode, self.text, self.key)


__all__ = ["CipherRequest"]
