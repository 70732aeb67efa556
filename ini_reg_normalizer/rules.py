"""
Deterministic formatting rules.

This file exists to make dialect differences explicit and enforceable.
"""

INI = "ini"
REG = "reg"
DIALECTS = (INI, REG)

COMMENT_PREFIX = ";"
KEY_VALUE_SEPARATOR = "="

# how an entry line is rendered per dialect
ENTRY_SEPARATOR = {
    INI: " = ",
    REG: "=",
}
INLINE_COMMENT_SEPARATOR = " ; "

# registry export headers; version 5.00 files are written by regedit, REGEDIT4 by older tools
REG_HEADER_PREFIXES = ("Windows Registry Editor Version", "REGEDIT4")

EXTENSION_DIALECTS = {
    ".ini": INI,
    ".inf": INI,
    ".cfg": INI,
    ".reg": REG,
}
DEFAULT_DIALECT = INI

TARGET_ENCODING = "utf-8"
BOM_ENCODINGS = {
    b"\xff\xfe": "utf-16",
    b"\xfe\xff": "utf-16",
    b"\xef\xbb\xbf": "utf-8-sig",
}

LOG_LEVEL_ENV = "INI_REG_LOG_LEVEL"
