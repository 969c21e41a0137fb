import base64

from fastapi.testclient import TestClient
from csvtidy import reader
from csvtidy.main import app
from csvtidy.rules import EXCEL_CELL_CHAR_LIMIT

client = TestClient(app)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_clean_pads_and_trims():
    raw = b"a,b\nc\n,\n"

    files = {"file": ("test.csv", raw, "text/csv")}
    r = client.post("/clean", files=files, params={"verbose": "true"})
    assert r.status_code == 200

    data = r.json()
    assert data["normalized_csv"]["encoding"] == "utf-8-sig"

    out_bytes = base64.b64decode(data["normalized_csv"]["content_b64"])
    assert out_bytes.startswith(b"\xef\xbb\xbf")
    assert out_bytes.decode("utf-8-sig") == "a,b\nc,\n"

    summary = data["report"]["summary"]
    assert summary == {"rows_in": 3, "rows_out": 2, "columns": 2, "diagnostics": 2}
    messages = [d["message"] for d in data["report"]["diagnostics"]]
    assert messages == ["Padding with 1 cells.", "Trimming 1 trailing empty rows."]

def test_clean_without_verbose_has_no_diagnostics():
    files = {"file": ("test.csv", b"a,b\nc\n", "text/csv")}
    r = client.post("/clean", files=files)
    assert r.status_code == 200
    assert r.json()["report"]["diagnostics"] == []

def test_clean_latin1_input():
    # Include a Latin-1 character to force non-ASCII handling
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")

    files = {"file": ("test.csv", raw, "text/csv")}
    r = client.post("/clean", files=files)
    assert r.status_code == 200

    out_bytes = base64.b64decode(r.json()["normalized_csv"]["content_b64"])
    assert "Montréal" in out_bytes.decode("utf-8-sig")

def test_clean_rejects_non_csv_filename():
    files = {"file": ("test.txt", b"a,b\n", "text/plain")}
    r = client.post("/clean", files=files)
    assert r.status_code == 422

class NoMatch:
    def best(self):
        return None

def test_clean_parse_failure_is_422(monkeypatch):
    monkeypatch.setattr(reader, "from_bytes", lambda raw: NoMatch())
    files = {"file": ("bad.csv", b"a,\xff\xfe\n", "text/csv")}
    r = client.post("/clean", files=files)
    assert r.status_code == 422
    assert r.json()["detail"] == "Unable to detect input encoding"

def test_clean_keeps_cells_over_stdlib_field_limit():
    raw = b"h\n" + b"x" * 200000 + b"\n"
    files = {"file": ("big.csv", raw, "text/csv")}
    r = client.post("/clean", files=files, params={"excel": "true"})
    assert r.status_code == 200

    out_bytes = base64.b64decode(r.json()["normalized_csv"]["content_b64"])
    assert out_bytes.decode("utf-8-sig") == "h\n" + "x" * EXCEL_CELL_CHAR_LIMIT + "\n"

def test_view_renders_table():
    raw = b'Name,Note\nAl,"line1\nline2"\n'
    files = {"file": ("test.csv", raw, "text/csv")}
    r = client.post("/view", files=files, params={"max_width": 10})
    assert r.status_code == 200

    data = r.json()
    assert data["table"] == (
        "+------+-------+\n"
        "| Name | Note  |\n"
        "+------+-------+\n"
        "| Al   | line1 |\n"
        "+------+-------+\n"
    )
    assert data["columns"] == 2
    assert data["rows_shown"] == 1
    assert data["rows_total"] == 1

def test_view_rejects_zero_width():
    files = {"file": ("test.csv", b"a\n", "text/csv")}
    r = client.post("/view", files=files, params={"max_width": 0})
    assert r.status_code == 422
