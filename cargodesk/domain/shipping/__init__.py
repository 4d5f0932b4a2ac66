"""
Shipping bounded context - Domain layer.

Aggregates:
- Shipment: goods lines plus tracking history

Services:
- TrackingHistoryGenerator: backfills history for shipments entered mid-journey
"""
