"""
Netpulse - Connectivity Monitoring Engine

Periodically probes a mutable list of targets over TCP or ICMP ping and
streams every result to a sink.

Usage Examples:

# Ad-hoc probe
from netpulse import probe_target
result = probe_target("example.com", 443)

# Periodic monitoring
from netpulse import Target, TargetRegistry, ProbeScheduler, CallbackSink
registry = TargetRegistry()
registry.replace_all([Target(id="cf", name="Cloudflare", host="1.1.1.1", port=443)])
scheduler = ProbeScheduler(registry, CallbackSink(print))
scheduler.start()
"""

from .models import Target, ProbeResult, ProbeType
from .registry import TargetRegistry
from .probe import probe_target, run_probe
from .scheduler import ProbeScheduler
from .sinks import ResultSink, CallbackSink, LoggingSink, WebhookSink, MultiSink, StatsSink, deliver
from .stats import RollingStats, TargetStats

__version__ = "0.1.0"
__all__ = [
    "Target",
    "ProbeResult",
    "ProbeType",
    "TargetRegistry",
    "probe_target",
    "run_probe",
    "ProbeScheduler",
    "ResultSink",
    "CallbackSink",
    "LoggingSink",
    "WebhookSink",
    "MultiSink",
    "StatsSink",
    "deliver",
    "RollingStats",
    "TargetStats",
]
