"""
Typed view of the NATS /jsz?consumers=true response.

Only the fields the exporter turns into metrics are modelled; everything
else the server sends is ignored. Optional sections (meta_cluster, config,
per-stream and per-consumer cluster info) are None when the server omits
them, which is the normal case for a non-clustered server.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _JszModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class MetaClusterInfo(_JszModel):
    name: str = ""
    leader: str = ""


class JetStreamConfig(_JszModel):
    domain: str = ""


class ClusterInfo(_JszModel):
    name: str = ""
    leader: str = ""


class StreamState(_JszModel):
    messages: int = Field(default=0, ge=0)
    bytes: int = Field(default=0, ge=0)
    last_seq: int = Field(default=0, ge=0)
    consumer_count: int = Field(default=0, ge=0)


class SequencePair(_JszModel):
    consumer_seq: int = Field(default=0, ge=0)
    stream_seq: int = Field(default=0, ge=0)


class ConsumerConfig(_JszModel):
    deliver_subject: str = ""


class ConsumerDetail(_JszModel):
    name: str
    cluster: Optional[ClusterInfo] = None
    config: Optional[ConsumerConfig] = None
    delivered: SequencePair = Field(default_factory=SequencePair)
    num_ack_pending: int = Field(default=0, ge=0)
    num_redelivered: int = Field(default=0, ge=0)
    num_waiting: int = Field(default=0, ge=0)
    num_pending: int = Field(default=0, ge=0)

    @property
    def leader(self) -> str:
        return self.cluster.leader if self.cluster else ""

    @property
    def deliver_subject(self) -> str:
        # Pull consumers have no deliver subject.
        return self.config.deliver_subject if self.config else ""


class StreamDetail(_JszModel):
    name: str
    cluster: Optional[ClusterInfo] = None
    state: StreamState = Field(default_factory=StreamState)
    consumer_detail: List[ConsumerDetail] = Field(default_factory=list)

    @property
    def leader(self) -> str:
        return self.cluster.leader if self.cluster else ""


class AccountDetail(_JszModel):
    name: str = ""
    stream_detail: List[StreamDetail] = Field(default_factory=list)


class JszSnapshot(_JszModel):
    """Root of one /jsz response."""

    server_id: str = ""
    streams: int = Field(default=0, ge=0)
    consumers: int = Field(default=0, ge=0)
    messages: int = Field(default=0, ge=0)
    bytes: int = Field(default=0, ge=0)
    config: Optional[JetStreamConfig] = None
    meta_cluster: Optional[MetaClusterInfo] = None
    account_details: List[AccountDetail] = Field(default_factory=list)

    @property
    def cluster_name(self) -> str:
        return self.meta_cluster.name if self.meta_cluster else ""

    @property
    def cluster_leader(self) -> str:
        return self.meta_cluster.leader if self.meta_cluster else ""

    @property
    def domain(self) -> str:
        return self.config.domain if self.config else ""

    def iter_streams(self):
        """Yield every StreamDetail in account order, then stream order."""
        for account in self.account_details:
            yield from account.stream_detail
