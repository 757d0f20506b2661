"""dialframe: a pluggable telephony application framework."""

__version__ = "0.1.0"
