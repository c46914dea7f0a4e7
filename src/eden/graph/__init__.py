from eden.graph.resolver import PageGraphResolver, Resolution

__all__ = ["PageGraphResolver", "Resolution"]
