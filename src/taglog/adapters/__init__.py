"""Adapters connecting the logging core to sinks, stdlib logging and ASGI."""
