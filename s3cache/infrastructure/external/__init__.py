"""External services: object storage transport."""
