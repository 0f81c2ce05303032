from .broadcast_hub import BroadcastHub

__all__ = ["BroadcastHub"]
