from collections.abc import Iterable, Mapping

from wavefront_promql_proxy.core.models import ResampledSeries


def label_sort_key(labels: Mapping[str, str]) -> tuple[str, ...]:
    """Flatten labels into ``(k1, v1, k2, v2, ...)`` ordered by key.

    Tuples compare element by element and a strict prefix sorts first.
    """
    flat: list[str] = []
    for key in sorted(labels):
        flat.extend((key, labels[key]))
    return tuple(flat)


def sort_series(series: Iterable[ResampledSeries]) -> tuple[ResampledSeries, ...]:
    keyed = [(label_sort_key(s.metric_labels), s) for s in series]
    keyed.sort(key=lambda pair: pair[0])
    return tuple(s for _, s in keyed)
