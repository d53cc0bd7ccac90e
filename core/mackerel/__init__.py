"""
core/mackerel - mackerel-agent 플러그인 규약

Example:
    from core.mackerel import Graph, GraphMetric, MackerelPlugin

    helper = MackerelPlugin(plugin, tempfile="")
    helper.run()
"""

from .graph import Graph, GraphMetric, title
from .helper import MackerelPlugin, MetricsPlugin

__all__: list[str] = [
    "Graph",
    "GraphMetric",
    "MackerelPlugin",
    "MetricsPlugin",
    "title",
]
