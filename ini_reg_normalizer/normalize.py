"""
Byte-level wrapper around the formatting pipeline.

Responsibilities:
- encoding detection + decode (BOMs first, charset-normalizer otherwise)
- dialect selection (explicit, file extension, content sniffing)
- newline policy (CRLF kept when it dominates the input, LF otherwise)
- re-encoding in the input's encoding family
- report of what the formatter saw
"""

from __future__ import annotations

import base64
import hashlib
from pathlib import PurePath
from typing import Any, Dict, Optional, Tuple

from charset_normalizer import from_bytes

from .assemble import assemble_text
from .document import Document
from .formatter import build_document, check_dialect
from .logging_config import get_logger
from .parse import is_registry_header
from .rules import BOM_ENCODINGS, DEFAULT_DIALECT, EXTENSION_DIALECTS, REG, TARGET_ENCODING

logger = get_logger("normalize")


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def dialect_for_filename(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    return EXTENSION_DIALECTS.get(PurePath(filename).suffix.lower())


def resolve_dialect(text: str, filename: Optional[str] = None, dialect: Optional[str] = None) -> str:
    """
    Pick the dialect for a document.

    An explicit dialect wins, then the file extension, then a registry
    header on the first non-blank line. Anything else is INI.
    An explicit dialect that is not supported raises UnsupportedDialectError.
    """
    if dialect:
        return check_dialect(dialect)

    by_extension = dialect_for_filename(filename)
    if by_extension:
        return by_extension

    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return REG if is_registry_header(stripped) else DEFAULT_DIALECT
    return DEFAULT_DIALECT


def decode_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode input bytes.

    Rules:
    - A UTF-16 or UTF-8 BOM decides the encoding outright.
    - Otherwise detect best-effort via charset-normalizer.
    - If decode fails, fall back to UTF-8, then UTF-8 with replacement characters.
    - Output keeps the encoding family: UTF-16 stays UTF-16 (with BOM, same byte order), UTF-8 with
      BOM keeps its BOM, everything else becomes plain UTF-8.
    """
    detected = None
    for bom, encoding in BOM_ENCODINGS.items():
        if raw.startswith(bom):
            detected = encoding
            break

    if detected is None and raw:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding

    decode_used = detected or TARGET_ENCODING
    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode(TARGET_ENCODING)
            decode_used = TARGET_ENCODING
            decode_fallback = True
        except UnicodeDecodeError:
            # keep going deterministically rather than rejecting the file
            text = raw.decode(TARGET_ENCODING, errors="replace")
            decode_used = TARGET_ENCODING
            decode_fallback = True

    if decode_fallback:
        logger.warning("Decoding as %s failed; fell back to %s", detected, decode_used)

    family = decode_used.lower().replace("_", "-")
    if family.startswith("utf-16"):
        # keep the byte order the BOM declared; BOM-less input is written little-endian
        output = "utf-16-be" if raw.startswith(b"\xfe\xff") or family == "utf-16-be" else "utf-16-le"
    elif family == "utf-8-sig":
        output = "utf-8-sig"
    else:
        output = TARGET_ENCODING

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "output": output,
    }


def encode_text(text: str, encoding: str) -> bytes:
    # the explicit-endian codecs write no BOM of their own
    if encoding in ("utf-16-le", "utf-16-be"):
        text = "\ufeff" + text
    return text.encode(encoding)


def count_newlines(text: str) -> Dict[str, int]:
    crlf = text.count("\r\n")
    return {
        "crlf": crlf,
        "cr": text.count("\r") - crlf,
        "lf": text.count("\n") - crlf,
    }


def choose_newline(counts: Dict[str, int]) -> str:
    return "crlf" if counts["crlf"] > counts["lf"] + counts["cr"] else "lf"


def document_report(document: Document) -> Dict[str, Any]:
    sections = [s for s in document if not s.is_global]
    entries = [e for s in document for e in s.entries]
    return {
        "dialect": document.dialect,
        "sections": len(sections),
        "entries": len(entries),
        "comments": document.comment_lines,
        "inline_comments": sum(1 for e in entries if e.inline_comment),
        "opaque_lines": document.opaque_lines,
        "merged_sections": document.merged_sections,
        "registry_header": document.registry_header is not None,
    }


def format_bytes(raw: bytes, filename: Optional[str] = None, dialect: Optional[str] = None) -> Dict[str, Any]:
    """
    Format raw file bytes.
    Returns a dict matching the API's response envelope.
    """
    text, enc_report = decode_bytes(raw)
    resolved = resolve_dialect(text, filename=filename, dialect=dialect)

    nl_before = count_newlines(text)
    newline = choose_newline(nl_before)

    document = build_document(resolved, text)
    formatted = assemble_text(document)
    if newline == "crlf":
        formatted = formatted.replace("\n", "\r\n")

    normalized = encode_text(formatted, enc_report["output"])
    changed = normalized != raw
    logger.info(
        "Formatted %s as %s (%d bytes in, %d bytes out, changed=%s)",
        filename or "<bytes>",
        resolved,
        len(raw),
        len(normalized),
        changed,
    )

    return {
        "formatted": {
            "sha256": _sha256_hex(normalized),
            "encoding": enc_report["output"],
            "newline": newline,
            "content_b64": base64.b64encode(normalized).decode("ascii"),
        },
        "report": {
            "summary": {
                **document_report(document),
                "changed": changed,
                "deterministic": True,
            },
            "encoding": enc_report,
            "newlines": {
                "before": nl_before,
                "output": newline,
            },
        },
    }

