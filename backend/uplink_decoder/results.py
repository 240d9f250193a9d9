# results.py
# Decode outcomes: exactly one of NoData / ShortFrame / Reading per frame.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class NoData:
    """Nothing to decode. Carries fatal errors only, never data."""

    errors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"errors": list(self.errors)}


@dataclass(frozen=True)
class ShortFrame:
    """Frame shorter than the fixed layout; raw bytes are handed back undecoded."""

    raw: tuple[int, ...]
    warning: str

    def to_dict(self) -> dict[str, Any]:
        return {"data": {"raw": list(self.raw), "warning": self.warning}}


@dataclass(frozen=True)
class Reading:
    temperature: float
    temperature_valid: bool
    humidity: float
    humidity_valid: bool
    sensor_type: str
    sensor_id: int
    status_byte: int
    bytes_received: int
    rssi: Optional[Number] = None
    snr: Optional[Number] = None
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    temperature_unit: str = "°C"
    humidity_unit: str = "%"

    @property
    def temperature_status(self) -> str:
        return "OK" if self.temperature_valid else "ERROR"

    @property
    def humidity_status(self) -> str:
        return "OK" if self.humidity_valid else "ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": {
                "temperature": self.temperature,
                "temperature_valid": self.temperature_valid,
                "temperature_status": self.temperature_status,
                "humidity": self.humidity,
                "humidity_valid": self.humidity_valid,
                "humidity_status": self.humidity_status,
                "temperature_unit": self.temperature_unit,
                "humidity_unit": self.humidity_unit,
                "sensor_type": self.sensor_type,
                "sensor_id": self.sensor_id,
                "bytes_received": self.bytes_received,
                "status_byte": self.status_byte,
                "rssi": self.rssi,
                "snr": self.snr,
            },
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


DecodeResult = Union[NoData, ShortFrame, Reading]
