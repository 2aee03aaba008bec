"""File-backed inbound store."""
import json

import pytest

from app.domain.ports import ExpiryLookupError, InboundSourceError
from app.service.inbound_service import InboundStore


def _write(path, doc) -> InboundStore:
    path.write_text(json.dumps(doc) if not isinstance(doc, str) else doc, encoding="utf-8")
    return InboundStore(path)


@pytest.fixture
def store(tmp_path) -> InboundStore:
    return _write(
        tmp_path / "inbounds.json",
        {
            "inbounds": [
                {
                    "id": 1,
                    "remark": "vless-main",
                    "protocol": "vless",
                    "port": 443,
                    "settings": {
                        "clients": [
                            {"id": "a", "expiryTime": 1_735_689_600_000},
                            {"id": "b", "expiryTime": None},
                        ]
                    },
                },
                {
                    "id": 2,
                    "remark": "vmess",
                    "protocol": "vmess",
                    "port": 8443,
                    "enable": False,
                    "settings": json.dumps({"clients": [{"id": "c", "expiryTime": 0}, {"id": "a", "expiryTime": 5}]}),
                },
            ]
        },
    )


def test_finds_client_in_object_settings(store):
    assert store.get_client_expiry_by_uuid("a") == (1_735_689_600_000, True)


def test_finds_client_in_string_settings(store):
    assert store.get_client_expiry_by_uuid("c") == (0, True)


def test_null_expiry_reads_as_zero(store):
    assert store.get_client_expiry_by_uuid("b") == (0, True)


def test_unknown_client(store):
    assert store.get_client_expiry_by_uuid("zzz") == (0, False)


def test_missing_file_is_lookup_error(tmp_path):
    with pytest.raises(ExpiryLookupError):
        InboundStore(tmp_path / "absent.json").get_client_expiry_by_uuid("a")


def test_malformed_json_is_lookup_error(tmp_path):
    store = _write(tmp_path / "inbounds.json", "{not json")
    with pytest.raises(ExpiryLookupError):
        store.get_client_expiry_by_uuid("a")


def test_document_without_inbounds_is_lookup_error(tmp_path):
    store = _write(tmp_path / "inbounds.json", {"something": []})
    with pytest.raises(ExpiryLookupError):
        store.get_client_expiry_by_uuid("a")


def test_malformed_settings_is_lookup_error(tmp_path):
    store = _write(tmp_path / "inbounds.json", {"inbounds": [{"id": 9, "settings": "{broken"}]})
    with pytest.raises(ExpiryLookupError):
        store.get_client_expiry_by_uuid("a")


def test_list_inbounds_projection(store):
    rows = store.list_inbounds()
    assert rows == [
        {"id": 1, "remark": "vless-main", "protocol": "vless", "port": 443, "enable": True, "clientCount": 2},
        {"id": 2, "remark": "vmess", "protocol": "vmess", "port": 8443, "enable": False, "clientCount": 2},
    ]


def test_list_inbounds_tolerates_bad_settings(tmp_path):
    store = _write(tmp_path / "inbounds.json", {"inbounds": [{"id": 9, "settings": "{broken"}]})
    assert store.list_inbounds()[0]["clientCount"] == 0


def test_overflowing_expiry_is_source_error(tmp_path):
    store = _write(tmp_path / "inbounds.json", '{"inbounds": [{"settings": {"clients": [{"id": "a", "expiryTime": 1e400}]}}]}')
    with pytest.raises(InboundSourceError):
        store.get_client_expiry_by_uuid("a")


def test_lookup_error_name_is_kept():
    assert ExpiryLookupError is InboundSourceError
