from grainlink.transports.base import LineTransport

__all__ = ["LineTransport"]
