"""
boto3 access for the audit: inventory, CloudWatch samples and price list.

Everything above this module talks to AwsClients (or a fake with the same
methods) and never to boto3 directly.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

import boto3

from aws_bill_audit.config import AuditConfig

log = logging.getLogger(__name__)


class AwsClients:
    """One boto3 session plus the five service clients the audit needs."""

    def __init__(self, config: AuditConfig, session: Optional[boto3.Session] = None):
        self.config = config
        self.session = session or boto3.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
        )
        self.ec2 = self.session.client('ec2')
        self.rds = self.session.client('rds')
        self.elasticache = self.session.client('elasticache')
        self.cloudwatch = self.session.client('cloudwatch')
        # Price List API is only served from a few regions; ap-south-1 is one of them
        self.pricing = self.session.client('pricing')

    # ----------------------------
    # Inventory
    # ----------------------------
    def list_instances(self) -> List[Dict]:
        resp = self.ec2.describe_instances()
        instances = [i for r in resp.get('Reservations', []) for i in r.get('Instances', [])]
        log.debug("describe_instances returned %d instances", len(instances))
        return instances

    def list_db_instances(self) -> List[Dict]:
        instances = self.rds.describe_db_instances().get('DBInstances', [])
        log.debug("describe_db_instances returned %d instances", len(instances))
        return instances

    def list_cache_clusters(self) -> List[Dict]:
        clusters = self.elasticache.describe_cache_clusters().get('CacheClusters', [])
        log.debug("describe_cache_clusters returned %d clusters", len(clusters))
        return clusters

    # ----------------------------
    # Metrics
    # ----------------------------
    def metric_samples(self, namespace: str, metric_name: str, dimension_name: str, resource_id: str,
                       start: datetime, end: datetime, period: int) -> List[float]:
        resp = self.cloudwatch.get_metric_statistics(Namespace=namespace, MetricName=metric_name,
                                                     Dimensions=[{'Name': dimension_name, 'Value': resource_id}],
                                                     StartTime=start, EndTime=end,
                                                     Period=period, Statistics=['Average'])
        points = resp.get('Datapoints', [])
        log.debug("%s %s for %s: %d datapoints", namespace, metric_name, resource_id, len(points))
        return [p['Average'] for p in points]

    # ----------------------------
    # Pricing
    # ----------------------------
    def price_list(self, service_code: str, filters: List[Dict], max_results: int = 1) -> List:
        resp = self.pricing.get_products(ServiceCode=service_code, Filters=filters, MaxResults=max_results)
        log.debug("get_products %s %s: %d products", service_code, filters, len(resp.get('PriceList', [])))
        return resp.get('PriceList', [])
