"""Basic sanity checks for the mock JetStream generator."""

from jsz_exporter.mock.generator import MockJetStreamServer
from jsz_exporter.mock.mock_fetcher import MockFetcher
from jsz_exporter.metrics import Target
from jsz_exporter.snapshot import JszSnapshot


def test_payload_decodes_as_snapshot():
    server = MockJetStreamServer(seed=42, streams_per_account=3, consumers_per_stream=2)
    snap = JszSnapshot.model_validate(server.payload())

    assert snap.streams == 3
    assert snap.consumers == 6
    streams = list(snap.iter_streams())
    assert len(streams) == 3
    assert sum(s.state.messages for s in streams) == snap.messages
    assert sum(s.state.bytes for s in streams) == snap.bytes


def test_messages_accumulate():
    server = MockJetStreamServer(seed=42)
    first = JszSnapshot.model_validate(server.payload())
    second = JszSnapshot.model_validate(server.payload())

    assert second.messages >= first.messages
    for a, b in zip(first.iter_streams(), second.iter_streams()):
        assert b.state.last_seq >= a.state.last_seq


def test_consumers_never_pass_stream():
    server = MockJetStreamServer(seed=7)
    for _ in range(20):
        snap = JszSnapshot.model_validate(server.payload())
        for stream in snap.iter_streams():
            for c in stream.consumer_detail:
                assert c.delivered.stream_seq <= stream.state.last_seq
                assert c.num_pending == stream.state.last_seq - c.delivered.stream_seq


def test_deterministic_with_same_seed():
    assert MockJetStreamServer(seed=99).payload() == MockJetStreamServer(seed=99).payload()


def test_clustered_payload_has_leaders():
    snap = JszSnapshot.model_validate(MockJetStreamServer(clustered=True, domain="hub").payload())
    assert snap.cluster_name == "mock-cluster"
    assert snap.cluster_leader
    assert snap.domain == "hub"
    stream = next(snap.iter_streams())
    assert stream.leader
    assert stream.consumer_detail[0].leader


def test_push_and_pull_consumers():
    snap = JszSnapshot.model_validate(MockJetStreamServer(consumers_per_stream=2).payload())
    consumers = next(snap.iter_streams()).consumer_detail
    assert consumers[0].deliver_subject
    assert consumers[1].deliver_subject == ""


def test_multiple_accounts():
    snap = JszSnapshot.model_validate(MockJetStreamServer(accounts=2, streams_per_account=1).payload())
    assert [a.name for a in snap.account_details] == ["ACC0", "ACC1"]


def test_mock_fetcher_keeps_one_server_per_target():
    fetcher = MockFetcher(seed=1)
    a1 = fetcher.fetch(Target("a", "http://a"))
    b1 = fetcher.fetch(Target("b", "http://b"))
    a2 = fetcher.fetch(Target("a", "http://a"))

    assert a1.server_id == "a"
    assert b1.server_id == "b"
    assert a2.messages >= a1.messages
    fetcher.close()
