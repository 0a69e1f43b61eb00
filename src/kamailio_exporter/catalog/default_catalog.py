"""
Default Catalog - The Methods Supported Out of the Box.

Sample responses (kamcmd):

    tm.stats          { current: 1, waiting: 0, total: 9514528, ...,
                        6xx: 7782, 5xx: 2286589, 4xx: 961055, ... }
    sl.stats          { 200: 666263, 202: 0, 2xx: 0, ..., xxx: 0 }
    core.shmmem       { total: 67108864, free: 61189608, used: 2590984, ... }
    core.tcp_info     { readers: 8, max_connections: 4096, ... }
    dlg.stats_active  { starting: 152, connecting: 674, answering: 0,
                        ongoing: 512, all: 1338 }
"""

from __future__ import annotations

from kamailio_exporter.catalog.metric_catalog import MetricCatalog
from kamailio_exporter.domain.entities import counter, gauge
from kamailio_exporter.projectors import (
    CodeBucketProjector,
    DispatcherProjector,
    FlatProjector,
    PeerListProjector,
)


def build_default_catalog() -> MetricCatalog:
    """Create a catalog holding every supported method."""
    catalog = MetricCatalog()

    flat = FlatProjector()
    code_buckets = CodeBucketProjector()
    peers = PeerListProjector()

    m = "tm.stats"
    catalog.register(
        m,
        [
            gauge("current", "Current transactions.", m),
            gauge("waiting", "Waiting transactions.", m),
            counter("total", "Total transactions.", m),
            counter("total_local", "Total local transactions.", m),
            counter("rpl_received", "Number of reply received.", m),
            counter("rpl_generated", "Number of reply generated.", m),
            counter("rpl_sent", "Number of reply sent.", m),
            counter("created", "Created transactions.", m),
            counter("freed", "Freed transactions.", m),
            counter("delayed_free", "Delayed free transactions.", m),
            counter("codes", "Per-code counters.", m),
        ],
        code_buckets,
    )

    m = "sl.stats"
    catalog.register(
        m,
        [counter("codes", "Per-code counters.", m)],
        code_buckets,
    )

    m = "core.shmmem"
    catalog.register(
        m,
        [
            gauge("total", "Total shared memory.", m),
            gauge("free", "Free shared memory.", m),
            gauge("used", "Used shared memory.", m),
            gauge("real_used", "Real used shared memory.", m),
            gauge("max_used", "Max used shared memory.", m),
            gauge("fragments", "Number of fragments in shared memory.", m),
        ],
        flat,
    )

    m = "core.uptime"
    catalog.register(
        m,
        [counter("uptime", "Uptime in seconds.", m)],
        flat,
    )

    m = "core.tcp_info"
    catalog.register(
        m,
        [
            gauge("readers", "Total TCP readers.", m),
            gauge("max_connections", "Maximum TCP connections.", m),
            gauge("max_tls_connections", "Maximum TLS connections.", m),
            gauge("opened_connections", "Opened TCP connections.", m),
            gauge("opened_tls_connections", "Opened TLS connections.", m),
            gauge("write_queued_bytes", "Write queued bytes.", m),
        ],
        flat,
    )

    m = "dispatcher.list"
    catalog.register(
        m,
        [gauge("target", "Target status.", m)],
        DispatcherProjector(),
    )

    m = "tls.info"
    catalog.register(
        m,
        [
            gauge("opened_connections", "TLS Opened Connections.", m),
            gauge("max_connections", "TLS Max Connections.", m),
        ],
        flat,
    )

    m = "dlg.stats_active"
    catalog.register(
        m,
        [
            gauge("starting", "Dialogs starting.", m),
            gauge("connecting", "Dialogs connecting.", m),
            gauge("answering", "Dialogs answering.", m),
            gauge("ongoing", "Dialogs ongoing.", m),
            gauge("all", "Dialogs all.", m),
            gauge("peer", "Dialog replication peer.", m),
        ],
        peers,
    )

    m = "dmq.list_nodes"
    catalog.register(
        m,
        [gauge("peer", "DMQ peer.", m)],
        peers,
    )

    return catalog
