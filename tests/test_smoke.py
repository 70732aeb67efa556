import base64
import codecs

from fastapi.testclient import TestClient
from ini_reg_normalizer.main import app

client = TestClient(app)

def _content(data):
    return base64.b64decode(data["formatted"]["content_b64"])

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_format_ini_upload():
    files = {"file": ("settings.ini", b"b=2\na=1\n[S]\nc=3\n", "text/plain")}
    r = client.post("/format", files=files)
    assert r.status_code == 200

    data = r.json()
    assert _content(data) == b"a = 1\nb = 2\n\n[S]\nc = 3\n"
    assert data["formatted"]["encoding"] == "utf-8"
    assert data["formatted"]["newline"] == "lf"

    summary = data["report"]["summary"]
    assert summary["dialect"] == "ini"
    assert summary["sections"] == 1
    assert summary["entries"] == 3
    assert summary["changed"] is True

def test_already_formatted_is_unchanged():
    raw = b"[S]\nkey = value\n"
    r = client.post("/format", files={"file": ("a.ini", raw, "text/plain")})
    assert r.status_code == 200
    data = r.json()
    assert _content(data) == raw
    assert data["report"]["summary"]["changed"] is False

def test_format_utf16_registry_export_keeps_encoding_and_crlf():
    # regedit writes version 5.00 exports as UTF-16 with BOM and CRLF newlines
    text = (
        "Windows Registry Editor Version 5.00\r\n"
        "\r\n"
        "[HKEY_CURRENT_USER\\Software\\Demo]\r\n"
        '"b"=dword:00000001\r\n'
        '"a"="x" ; first\r\n'
    )
    raw = codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    files = {"file": ("demo.reg", raw, "application/octet-stream")}
    r = client.post("/format", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["formatted"]["encoding"] == "utf-16-le"
    assert data["formatted"]["newline"] == "crlf"

    out_bytes = _content(data)
    assert out_bytes.startswith(codecs.BOM_UTF16_LE)
    assert out_bytes.decode("utf-16") == (
        "Windows Registry Editor Version 5.00\r\n"
        "\r\n"
        "[HKEY_CURRENT_USER\\Software\\Demo]\r\n"
        '"a"="x" ; first\r\n'
        '"b"=dword:00000001\r\n'
    )

    summary = data["report"]["summary"]
    assert summary["dialect"] == "reg"
    assert summary["registry_header"] is True
    assert summary["inline_comments"] == 1

def test_big_endian_utf16_keeps_byte_order():
    raw = codecs.BOM_UTF16_BE + "[K]\r\n\"a\"=1\r\n".encode("utf-16-be")
    r = client.post("/format", files={"file": ("be.reg", raw, "application/octet-stream")})
    assert r.status_code == 200

    data = r.json()
    assert data["formatted"]["encoding"] == "utf-16-be"
    assert _content(data) == raw
    assert data["report"]["summary"]["changed"] is False

def test_utf8_bom_preserved():
    raw = "\ufeffb=2\na=1\n".encode("utf-8")
    r = client.post("/format", files={"file": ("bom.ini", raw, "text/plain")})
    data = r.json()
    assert data["formatted"]["encoding"] == "utf-8-sig"
    assert _content(data) == b"\xef\xbb\xbfa = 1\nb = 2\n"

def test_latin1_input_rewritten_as_utf8():
    # Include a Latin-1 character to force non-ASCII handling
    raw = "[Ville]\nnom=Montréal\npays=Canada\n".encode("latin-1")
    r = client.post("/format", files={"file": ("city.ini", raw, "text/plain")})
    assert r.status_code == 200

    out_text = _content(r.json()).decode("utf-8")
    assert "Montréal" in out_text

def test_unknown_extension_rejected_without_dialect():
    r = client.post("/format", files={"file": ("notes.txt", b"a=1\n", "text/plain")})
    assert r.status_code == 422

def test_empty_dialect_treated_as_missing():
    r = client.post("/format?dialect=", files={"file": ("notes.txt", b"a=1\n", "text/plain")})
    assert r.status_code == 422

def test_explicit_dialect_overrides_extension():
    files = {"file": ("notes.txt", b'"b"=1\n"a"=2\n', "text/plain")}
    r = client.post("/format", params={"dialect": "reg"}, files=files)
    assert r.status_code == 200
    assert _content(r.json()) == b'"a"=2\n"b"=1\n'

def test_unsupported_dialect_rejected():
    files = {"file": ("a.ini", b"a=1\n", "text/plain")}
    r = client.post("/format", params={"dialect": "toml"}, files=files)
    assert r.status_code == 422
    assert "toml" in r.json()["detail"]

def test_format_text_endpoint():
    r = client.post("/format/text", json={"dialect": "ini", "text": "x=1 ; keep"})
    assert r.status_code == 200
    assert r.json() == {"dialect": "ini", "text": "x = 1 ; keep\n"}

def test_format_text_rejects_unknown_dialect():
    r = client.post("/format/text", json={"dialect": "yaml", "text": "a: 1"})
    assert r.status_code == 422
