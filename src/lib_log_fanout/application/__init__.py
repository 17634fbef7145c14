"""Application layer: ports and use cases wiring transports to the dispatcher."""
