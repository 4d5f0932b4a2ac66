from .route_sequencer import RouteSequencer

__all__ = ["RouteSequencer"]
