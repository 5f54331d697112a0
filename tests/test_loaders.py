import io
import json
import urllib.error
from decimal import Decimal

import pytest

from sales_dashboard.config import DEFAULT_CONFIG
from sales_dashboard.loaders import FetchError, get_loader, loader_key
from sales_dashboard.loaders.local import FileLoader
from sales_dashboard.loaders.remote import RemoteJSONLoader

PAYLOAD = [
    {
        "id": 1,
        "title": "Backpack",
        "price": 329.85,
        "description": "Everyday pack",
        "category": "men's clothing",
        "image": "https://example.com/1.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    },
    {"title": "missing id"},
    {
        "id": 2,
        "title": "Jacket",
        "price": 55.99,
        "description": "Warm",
        "category": "men's clothing",
        "image": "https://example.com/2.jpg",
        "sold": True,
        "dateOfSale": "2021-10-27T20:29:54+05:30",
    },
]


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def test_loader_key():
    assert loader_key("https://s3.amazonaws.com/x.json") == "http"
    assert loader_key("HTTP://host/x.json") == "http"
    assert loader_key("data/catalog.json") == "file"


def test_get_loader_builds_configured_class():
    assert isinstance(get_loader("https://host/x.json", DEFAULT_CONFIG), RemoteJSONLoader)
    assert isinstance(get_loader("catalog.csv", DEFAULT_CONFIG), FileLoader)


def test_remote_loader_parses_and_skips_bad_records(monkeypatch):
    calls = {}

    def fake_urlopen(req, timeout):
        calls["url"] = req.full_url
        calls["timeout"] = timeout
        return FakeResponse(json.dumps(PAYLOAD).encode("utf-8"))

    monkeypatch.setattr("sales_dashboard.loaders.remote.urllib.request.urlopen", fake_urlopen)

    txs = list(RemoteJSONLoader({"timeout": 5}).load("https://host/product_transaction.json"))

    assert calls == {"url": "https://host/product_transaction.json", "timeout": 5.0}
    assert [tx.id for tx in txs] == [1, 2]
    assert txs[0].price == Decimal("329.85")


def test_remote_loader_http_error(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.HTTPError(req.full_url, 404, "Not Found", {}, None)

    monkeypatch.setattr("sales_dashboard.loaders.remote.urllib.request.urlopen", fake_urlopen)

    with pytest.raises(FetchError, match="HTTP error! status: 404"):
        list(RemoteJSONLoader().load("https://host/missing.json"))


def test_remote_loader_network_error(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr("sales_dashboard.loaders.remote.urllib.request.urlopen", fake_urlopen)

    with pytest.raises(FetchError, match="connection refused"):
        list(RemoteJSONLoader().load("https://host/x.json"))


def test_remote_loader_rejects_non_list(monkeypatch):
    monkeypatch.setattr(
        "sales_dashboard.loaders.remote.urllib.request.urlopen",
        lambda req, timeout: FakeResponse(b'{"error": "nope"}'),
    )
    with pytest.raises(FetchError):
        list(RemoteJSONLoader().load("https://host/x.json"))


def test_remote_loader_rejects_invalid_json(monkeypatch):
    monkeypatch.setattr(
        "sales_dashboard.loaders.remote.urllib.request.urlopen",
        lambda req, timeout: FakeResponse(b"<html>proxy error</html>"),
    )
    with pytest.raises(FetchError, match="Invalid JSON"):
        list(RemoteJSONLoader().load("https://host/x.json"))


def test_file_loader_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(PAYLOAD), encoding="utf-8")
    txs = list(FileLoader().load(str(path)))
    assert [tx.title for tx in txs] == ["Backpack", "Jacket"]
    assert txs[1].sold is True


def test_file_loader_csv(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text(
        "id,title,price,description,category,image,sold,dateOfSale\n"
        "1,Backpack,329.85,Everyday pack,bags,,False,2021-11-27T20:29:54+05:30\n"
        "2,Jacket,,Warm,clothing,,True,2021-10-27T20:29:54+05:30\n"
        ",Orphan,10,,,,True,2021-10-01\n",
        encoding="utf-8",
    )
    txs = list(FileLoader().load(str(path)))
    assert [tx.id for tx in txs] == [1, 2]
    assert txs[0].price == Decimal("329.85")
    assert txs[0].sold is False
    assert txs[1].price is None
    assert txs[1].sold is True
    assert txs[1].month == 10


def test_file_loader_csv_missing_columns(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text("id,title\n1,Backpack\n", encoding="utf-8")
    with pytest.raises(FetchError, match="Missing required column"):
        list(FileLoader().load(str(path)))


def test_file_loader_missing_file(tmp_path):
    with pytest.raises(FetchError, match="not found"):
        list(FileLoader().load(str(tmp_path / "nope.json")))


def test_remote_loader_rejects_non_utf8_payload(monkeypatch):
    monkeypatch.setattr(
        "sales_dashboard.loaders.remote.urllib.request.urlopen",
        lambda req, timeout: FakeResponse(b"\xff\xfe[]"),
    )
    with pytest.raises(FetchError, match="not UTF-8"):
        list(RemoteJSONLoader().load("https://host/x.json"))


def test_file_loader_json_not_utf8(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_bytes(b"\xff\xfe[]")
    with pytest.raises(FetchError, match="Invalid JSON"):
        list(FileLoader().load(str(path)))


def test_file_loader_empty_csv(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(FetchError, match="Invalid CSV"):
        list(FileLoader().load(str(path)))


def test_file_loader_malformed_csv(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text(
        "id,title,price,dateOfSale\n"
        "1,Backpack,10,2021-10-01\n"
        "2,Jacket,20,2021-10-02,extra,fields\n",
        encoding="utf-8",
    )
    with pytest.raises(FetchError, match="Invalid CSV"):
        list(FileLoader().load(str(path)))
