"""Audio level metering, meter layout geometry and sample-buffer utilities."""

__version__ = "0.1.0"
__all__ = [
    "mathsupport",
    "meter_source",
    "bufferops",
    "look_and_feel",
    "layouts",
    "level_meter",
]