"""
Per-category collectors that turn live EC2, RDS and ElastiCache inventory
into report rows.

Each collector lists its resources, then for every resource asks CloudWatch
for the 7-day CPU average and the Price List API for the on-demand hourly
rate, and prices the current month at that rate.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import Console

from aws_bill_audit.billing import hours_elapsed_this_month, hours_in_month
from aws_bill_audit.pricing import unit_price
from aws_bill_audit.report import NAME_NOT_AVAILABLE, ReportRow
from aws_bill_audit.utilization import Utilization, average_utilization

log = logging.getLogger(__name__)

CPU_METRIC = 'CPUUtilization'
LIFECYCLE_ON_DEMAND = 'On-Demand'
# RDS and ElastiCache purchase type is not looked up
LIFECYCLE_PLACEHOLDER = 'Reserved'


# ============================================================================
# ABSTRACT BASE CLASS
# ============================================================================

class ResourceCollector(ABC):
    """Interface and shared row building for one resource category."""

    selector: str = ''
    label: str = ''
    service_code: str = ''
    namespace: str = ''
    metric_name: str = CPU_METRIC
    dimension_name: str = ''

    def __init__(self, clients, console: Optional[Console] = None,
                 clock: Callable[[], datetime] = datetime.now, workers: int = 1):
        self.clients = clients
        self.console = console or Console()
        self.clock = clock
        self.workers = max(1, workers)

    @property
    def progress_message(self) -> str:
        return f"Checking for idle and underutilized {self.label} instances..."

    @abstractmethod
    def list_resources(self) -> List[Dict]:
        """Enumerate live resources of this category."""

    def include(self, resource: Dict) -> bool:
        return True

    @abstractmethod
    def resource_id(self, resource: Dict) -> str:
        pass

    def resource_name(self, resource: Dict) -> str:
        return self.resource_id(resource)

    @abstractmethod
    def resource_family(self, resource: Dict) -> str:
        pass

    @abstractmethod
    def created_at(self, resource: Dict):
        pass

    def lifecycle(self, resource: Dict) -> str:
        return LIFECYCLE_PLACEHOLDER

    # ----------------------------
    # Collection
    # ----------------------------
    def collect(self) -> List[ReportRow]:
        self.console.print(self.progress_message)
        resources = [r for r in self.list_resources() if self.include(r)]
        now = self.clock()
        elapsed = hours_elapsed_this_month(now)
        total = hours_in_month(now)
        log.info("%s: %d resources, %d/%d hours billed this month", self.label, len(resources), elapsed, total)
        # CloudWatch reads naive datetimes as UTC
        window_end = now.astimezone(timezone.utc)
        lookup = partial(self.lookup, now=window_end)

        if self.workers > 1 and len(resources) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as ex:
                lookups = list(ex.map(lookup, resources))
        else:
            lookups = [lookup(r) for r in resources]

        return [self.build_row(r, cpu, price, elapsed, total)
                for r, (cpu, price) in zip(resources, lookups)]

    def lookup(self, resource: Dict, now: Optional[datetime] = None) -> Tuple[Utilization, float]:
        """CPU average and hourly price for one resource."""
        cpu = average_utilization(self.clients, self.namespace, self.metric_name,
                                  self.dimension_name, self.resource_id(resource), now=now)
        price = unit_price(self.clients, self.service_code, self.resource_family(resource),
                           self.clients.config.pricing_location)
        return cpu, price

    def build_row(self, resource: Dict, cpu: Utilization, price: float,
                  elapsed_hours: int, month_hours: int) -> ReportRow:
        return ReportRow(
            resource_id=self.resource_id(resource),
            resource_name=self.resource_name(resource),
            resource_family=self.resource_family(resource),
            resource_type=self.label,
            created_at=self.created_at(resource),
            avg_cpu=cpu,
            # memory is not published by default for any of the three
            avg_memory=Utilization.unavailable(),
            lifecycle=self.lifecycle(resource),
            price_per_hour=price,
            bill_month_to_date=elapsed_hours * price,
            bill_for_month=month_hours * price,
        )


# ============================================================================
# EC2
# ============================================================================

class EC2Collector(ResourceCollector):
    selector = '1'
    label = 'EC2'
    service_code = 'AmazonEC2'
    namespace = 'AWS/EC2'
    dimension_name = 'InstanceId'

    def list_resources(self) -> List[Dict]:
        return self.clients.list_instances()

    def include(self, resource: Dict) -> bool:
        return resource.get('State', {}).get('Name') == 'running'

    def resource_id(self, resource: Dict) -> str:
        return resource['InstanceId']

    def resource_name(self, resource: Dict) -> str:
        for tag in resource.get('Tags') or []:
            if tag.get('Key') == 'Name':
                return tag.get('Value')
        return NAME_NOT_AVAILABLE

    def resource_family(self, resource: Dict) -> str:
        return resource['InstanceType']

    def created_at(self, resource: Dict):
        return resource.get('LaunchTime')

    def lifecycle(self, resource: Dict) -> str:
        return resource.get('InstanceLifecycle') or LIFECYCLE_ON_DEMAND


# ============================================================================
# RDS
# ============================================================================

class RDSCollector(ResourceCollector):
    selector = '2'
    label = 'RDS'
    service_code = 'AmazonRDS'
    namespace = 'AWS/RDS'
    dimension_name = 'DBInstanceIdentifier'

    def list_resources(self) -> List[Dict]:
        return self.clients.list_db_instances()

    def resource_id(self, resource: Dict) -> str:
        return resource['DBInstanceIdentifier']

    def resource_family(self, resource: Dict) -> str:
        return resource['DBInstanceClass']

    def created_at(self, resource: Dict):
        return resource.get('InstanceCreateTime')


# ============================================================================
# ELASTICACHE
# ============================================================================

class ElastiCacheCollector(ResourceCollector):
    selector = '3'
    label = 'ElastiCache'
    service_code = 'AmazonElastiCache'
    namespace = 'AWS/ElastiCache'
    dimension_name = 'CacheClusterId'

    def list_resources(self) -> List[Dict]:
        return self.clients.list_cache_clusters()

    def resource_id(self, resource: Dict) -> str:
        return resource['CacheClusterId']

    def resource_family(self, resource: Dict) -> str:
        return resource['CacheNodeType']

    def created_at(self, resource: Dict):
        return resource.get('CacheClusterCreateTime')


COLLECTORS = [EC2Collector, RDSCollector, ElastiCacheCollector]
