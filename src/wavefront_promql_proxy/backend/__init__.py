from wavefront_promql_proxy.backend.memory import InMemoryQueryExecutor
from wavefront_promql_proxy.backend.wavefront import CHART_API_PATH, WavefrontQueryExecutor, normalize_address

__all__ = [
    "CHART_API_PATH",
    "InMemoryQueryExecutor",
    "WavefrontQueryExecutor",
    "normalize_address",
]
