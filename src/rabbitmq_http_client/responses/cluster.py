"""Overview, cluster identity and node responses."""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .base import ApiModel, PossiblyEmpty


class ClusterIdentity(ApiModel):
    name: str


class Overview(ApiModel):
    cluster_name: str = ""
    node: str = ""
    erlang_full_version: str = ""
    erlang_version: str = ""
    server_version: str = Field(default="", alias="rabbitmq_version")
    product_name: str = ""
    product_version: str = ""
    management_version: str = ""
    statistics_db_event_queue: int = 0
    cluster_tags: Dict[str, Any] = {}
    node_tags: Dict[str, Any] = {}
    churn_rates: Dict[str, Any] = {}
    queue_totals: PossiblyEmpty[Dict[str, Any]] = None
    object_totals: Dict[str, Any] = {}
    message_stats: PossiblyEmpty[Dict[str, Any]] = None
    listeners: List[Dict[str, Any]] = []


class ClusterNode(ApiModel):
    name: str
    uptime: int = 0
    run_queue: int = 0
    processors: int = 0
    os_pid: str = ""
    fd_total: int = 0
    proc_total: int = 0
    mem_limit: int = 0
    mem_alarm: bool = False
    disk_free_limit: int = 0
    disk_free_alarm: bool = False
    rates_mode: str = ""
    enabled_plugins: List[str] = []
    being_drained: bool = False
    running: Optional[bool] = None


class NodeMemoryTotals(ApiModel):
    rss: int = 0
    allocated: int = 0
    used_by_runtime: int = Field(default=0, alias="erlang")


class NodeMemoryBreakdown(ApiModel):
    """Per-category memory use in bytes; ``total`` carries the three totals."""
    connection_readers: int = 0
    connection_channels: int = 0
    connection_other: int = 0
    classic_queue_procs: int = Field(default=0, alias="queue_procs")
    quorum_queue_procs: int = 0
    stream_queue_procs: int = 0
    plugins: int = 0
    metadata_store: int = 0
    other_procs: int = 0
    metrics: int = 0
    management_db: int = Field(default=0, alias="mgmt_db")
    mnesia: int = 0
    binary_heap: int = Field(default=0, alias="binary")
    message_indices: int = Field(default=0, alias="msg_index")
    code: int = 0
    atom_table: int = Field(default=0, alias="atom")
    other_system: int = 0
    allocated_but_unused: int = Field(default=0, alias="allocated_unused")
    reserved_but_unallocated: int = Field(default=0, alias="reserved_unallocated")
    calculation_strategy: str = Field(default="", alias="strategy")
    total: NodeMemoryTotals = Field(default_factory=NodeMemoryTotals)


class NodeMemoryFootprint(ApiModel):
    """``breakdown`` is None when the node reports ``"not_available"``."""
    breakdown: Optional[NodeMemoryBreakdown] = Field(default=None, alias="memory")

    @field_validator("breakdown", mode="before")
    @classmethod
    def _not_available_as_none(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None
