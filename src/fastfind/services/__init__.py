"""Service layer: the proximity cache orchestrator and its store adapters."""
