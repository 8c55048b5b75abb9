from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class EncodingReport(BaseModel):
    detected: Optional[str] = Field(default=None, examples=["ascii"])
    multibyte: bool = False
    notes: str = "Reversal is byte-level; multi-byte characters are not preserved."


class ReverseReport(BaseModel):
    lines: int = 0
    empty_lines: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    trailing_newline: bool = False
    output_sha256: str
    encoding: EncodingReport = Field(default_factory=EncodingReport)
