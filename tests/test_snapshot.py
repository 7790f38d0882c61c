"""Tests for decoding /jsz documents."""

import pytest
from pydantic import ValidationError

from jsz_exporter.snapshot import JszSnapshot


def test_decodes_full_document(orders_snapshot):
    snap = JszSnapshot.model_validate(orders_snapshot)

    assert snap.streams == 2
    assert snap.consumers == 5
    assert snap.messages == 100
    assert snap.bytes == 4096
    assert snap.cluster_name == "c1"
    assert snap.cluster_leader == "s1"
    assert snap.domain == ""

    streams = list(snap.iter_streams())
    assert [s.name for s in streams] == ["ORDERS"]
    assert streams[0].state.last_seq == 10

    consumer = streams[0].consumer_detail[0]
    assert consumer.name == "C1"
    assert consumer.delivered.consumer_seq == 9
    assert consumer.delivered.stream_seq == 10
    assert consumer.num_pending == 5
    assert consumer.deliver_subject == "orders.deliver"


def test_optional_sections_resolve_to_empty_strings():
    snap = JszSnapshot.model_validate({
        "streams": 1,
        "account_details": [{"stream_detail": [{"name": "S", "consumer_detail": [{"name": "P"}]}]}],
    })

    assert snap.cluster_name == ""
    assert snap.cluster_leader == ""
    assert snap.domain == ""

    stream = next(snap.iter_streams())
    assert stream.leader == ""
    assert stream.consumer_detail[0].leader == ""
    assert stream.consumer_detail[0].deliver_subject == ""


def test_non_clustered_server_has_no_accounts():
    snap = JszSnapshot.model_validate({"server_id": "x", "config": {"max_memory": 1}})
    assert snap.account_details == []
    assert list(snap.iter_streams()) == []


def test_iter_streams_flattens_accounts_in_order():
    snap = JszSnapshot.model_validate({
        "account_details": [
            {"name": "A", "stream_detail": [{"name": "A1"}, {"name": "A2"}]},
            {"name": "B", "stream_detail": [{"name": "B1"}]},
        ]
    })
    assert [s.name for s in snap.iter_streams()] == ["A1", "A2", "B1"]


def test_unknown_fields_are_ignored():
    snap = JszSnapshot.model_validate({"streams": 3, "api": {"total": 10, "errors": 0}, "ha_assets": 2})
    assert snap.streams == 3


def test_rejects_wrong_types():
    with pytest.raises(ValidationError):
        JszSnapshot.model_validate({"streams": "many"})


def test_rejects_malformed_json():
    with pytest.raises(ValidationError):
        JszSnapshot.model_validate_json(b"{not json")
