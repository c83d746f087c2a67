import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

log = logging.getLogger(__name__)

LOOKBACK = timedelta(days=7)
PERIOD_SECONDS = 3600
NO_DATA = 'No data'


@dataclass(frozen=True, repr=False)
class Utilization:
    """
    Average utilization over the lookback window, or the lack of one.

    An instance is either available (holds a float, which may be 0.0) or
    unavailable (the metric series was empty). Compare `available` rather
    than the value so a real 0% reading is never confused with no data.
    """

    value: Optional[float] = None

    @classmethod
    def average(cls, value: float) -> 'Utilization':
        return cls(float(value))

    @classmethod
    def unavailable(cls) -> 'Utilization':
        return cls(None)

    @property
    def available(self) -> bool:
        return self.value is not None

    def __repr__(self):
        if not self.available:
            return 'Utilization.unavailable()'
        return f'Utilization.average({self.value!r})'

    def __str__(self):
        return NO_DATA if not self.available else f'{self.value:.2f}'


def mean_utilization(samples: Iterable[float]) -> Utilization:
    values = list(samples)
    if not values:
        return Utilization.unavailable()
    return Utilization.average(sum(values) / len(values))


def average_utilization(clients, namespace: str, metric_name: str, dimension_name: str, resource_id: str,
                        now: Optional[datetime] = None) -> Utilization:
    """Mean of the hourly Average samples over the trailing 7 days."""
    end = now or datetime.now(timezone.utc)
    start = end - LOOKBACK
    samples = clients.metric_samples(namespace, metric_name, dimension_name, resource_id,
                                     start, end, PERIOD_SECONDS)
    result = mean_utilization(samples)
    log.debug("%s %s %s -> %s", namespace, metric_name, resource_id, result)
    return result
