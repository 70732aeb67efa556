from __future__ import annotations

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field


Dialect = Literal["ini", "reg"]


class FormattedFile(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    newline: Literal["lf", "crlf"] = "lf"
    content_b64: str


class ReportSummary(BaseModel):
    dialect: Dialect
    sections: int = 0
    entries: int = 0
    comments: int = 0
    inline_comments: int = 0
    opaque_lines: int = 0
    merged_sections: int = 0
    registry_header: bool = False
    changed: bool = False
    deterministic: bool = True


class EncodingReport(BaseModel):
    detected: Optional[str] = Field(default=None, examples=["utf-16"])
    decode_used: str
    decode_fallback: bool = False
    output: str


class NewlineReport(BaseModel):
    before: Dict[str, int] = Field(default_factory=dict)
    output: Literal["lf", "crlf"] = "lf"


class FormatReport(BaseModel):
    summary: ReportSummary
    encoding: EncodingReport
    newlines: NewlineReport


class FormatResponse(BaseModel):
    formatted: FormattedFile
    report: FormatReport


class FormatTextRequest(BaseModel):
    dialect: Dialect = "ini"
    text: str


class FormatTextResponse(BaseModel):
    dialect: Dialect
    text: str

class HealthResponse(BaseModel):
    ok: bool = True
