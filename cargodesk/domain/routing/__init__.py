"""
Routing bounded context - Domain layer.

Aggregates:
- Driver: who drives and where they are
- DeliveryRoute: a day's ordered pickups and deliveries

Services:
- RouteSequencer: stop order, leg distances and route totals
"""
