from .clock import Clock, current_millis

__all__ = ["Clock", "current_millis"]
