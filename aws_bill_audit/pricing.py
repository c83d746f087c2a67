import json
import logging
from typing import Dict, List, Union

from aws_bill_audit.errors import PricingError

log = logging.getLogger(__name__)

CURRENCY = 'USD'


def price_filters(instance_type: str, location: str) -> List[Dict]:
    return [
        {'Type': 'TERM_MATCH', 'Field': 'instanceType', 'Value': instance_type},
        {'Type': 'TERM_MATCH', 'Field': 'location', 'Value': location},
    ]


def on_demand_price(price_item: Union[str, Dict]) -> float:
    """
    Pull the hourly USD price out of one Price List product.

    The product is the JSON document get_products returns per match:
    terms -> OnDemand -> <offer> -> priceDimensions -> <rate> -> pricePerUnit.
    The first offer and the first rate are taken.
    """
    item = json.loads(price_item) if isinstance(price_item, str) else price_item
    try:
        offer = next(iter(item['terms']['OnDemand'].values()))
        dimension = next(iter(offer['priceDimensions'].values()))
        return float(dimension['pricePerUnit'][CURRENCY])
    except (KeyError, TypeError, StopIteration, ValueError) as e:
        raise PricingError(f"Unexpected price list entry shape: {e!r}") from e


def unit_price(clients, service_code: str, instance_type: str, location: str) -> float:
    products = clients.price_list(service_code, price_filters(instance_type, location), max_results=1)
    if not products:
        raise PricingError(f"No on-demand price for {service_code} {instance_type} in {location}")
    price = on_demand_price(products[0])
    log.debug("%s %s @ %s: %s %s/hour", service_code, instance_type, location, price, CURRENCY)
    return price
