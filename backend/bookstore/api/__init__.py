"""HTTP layer: router aggregation and route modules."""
