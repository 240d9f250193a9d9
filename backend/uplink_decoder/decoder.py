# decoder.py
# Unpack the 6-byte DHT22 uplink back into engineering units and flag bad fields.
#
# Frame layout (network byte order):
#   [temp i16 x100][rh u16 x100][status u8][sensor type u8]

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Sequence, Union

from .results import DecodeResult, NoData, Reading, ShortFrame

logger = logging.getLogger(__name__)

FRAME_LEN = 6
STATUS_VALID_BIT = 0x01
DHT22_TYPE = 0x22
# Devices send -999 when a read fails; anything below the guard band is a fault code.
SENTINEL_GUARD = -900.0

NO_DATA_ERROR = "No hay datos en el payload"
SHORT_FRAME_WARNING = "Payload menor a 6 bytes"
TEMPERATURE_WARNING = "Temperatura: Error o fuera de rango"
HUMIDITY_WARNING = "Humedad: Error o fuera de rango"

SENSOR_NAMES = {DHT22_TYPE: "DHT22"}
UNKNOWN_SENSOR = "Unknown"


@dataclass(frozen=True)
class FieldSpec:
    name: str; unit: str; lo: float; hi: float; scale: float; signed: bool


TEMPERATURE = FieldSpec("temperature", "°C", -40.0, 80.0, 100, True)
HUMIDITY = FieldSpec("humidity", "%", 0.0, 100.0, 100, False)

Payload = Union[bytes, bytearray, Sequence[int]]

_TENTH = Decimal("0.1")


@dataclass(frozen=True)
class RangeCheck:
    sensor_valid: bool
    temperature_in_range: bool
    humidity_in_range: bool

    @property
    def temperature_valid(self) -> bool:
        return self.sensor_valid and self.temperature_in_range

    @property
    def humidity_valid(self) -> bool:
        return self.sensor_valid and self.humidity_in_range


def _as_bytes(payload: Optional[Payload]) -> bytes:
    if payload is None:
        return b""
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str) or not isinstance(payload, Sequence):
        raise TypeError(f"payload must be bytes or a sequence of ints, got {type(payload).__name__}")
    for i, b in enumerate(payload):
        if isinstance(b, bool) or not isinstance(b, int):
            raise ValueError(f"byte {i} is not an integer: {b!r}")
        if not 0 <= b <= 0xFF:
            raise ValueError(f"byte {i} out of range 0..255: {b}")
    return bytes(payload)


def _round_tenth(value: float) -> float:
    # Exact binary value, ties away from zero: same digits as JS toFixed(1).
    return float(Decimal(value).quantize(_TENTH, rounding=ROUND_HALF_UP))


def _decode_field(spec: FieldSpec, msb: int, lsb: int) -> float:
    (raw,) = struct.unpack(">h" if spec.signed else ">H", bytes((msb, lsb)))
    return _round_tenth(raw / spec.scale)


def decode_temperature(msb: int, lsb: int) -> float:
    """Signed int16 hundredths of a degree -> °C with one decimal."""
    return _decode_field(TEMPERATURE, msb, lsb)


def decode_humidity(msb: int, lsb: int) -> float:
    """Unsigned uint16 hundredths of a percent -> %RH with one decimal."""
    return _decode_field(HUMIDITY, msb, lsb)


def classify_sensor(sensor_type: int) -> str:
    return SENSOR_NAMES.get(sensor_type, UNKNOWN_SENSOR)


def validate_frame(frame: bytes) -> Optional[Union[NoData, ShortFrame]]:
    """Return the terminal result for an undecodable frame, or None if it can be decoded."""

    if not frame:
        logger.warning("Uplink carried no payload bytes")
        return NoData(errors=(NO_DATA_ERROR,))
    if len(frame) < FRAME_LEN:
        logger.warning("Short uplink frame: %d of %d bytes (%s)", len(frame), FRAME_LEN, frame.hex().upper())
        return ShortFrame(raw=tuple(frame), warning=SHORT_FRAME_WARNING)
    return None


def check_ranges(temperature: float, humidity: float, status_byte: int) -> RangeCheck:
    sensor_valid = (status_byte & STATUS_VALID_BIT) != 0
    temp_ok = TEMPERATURE.lo <= temperature <= TEMPERATURE.hi
    hum_ok = HUMIDITY.lo <= humidity <= HUMIDITY.hi

    # Sensor fault code overrides everything, including the other field's range check.
    if temperature < SENTINEL_GUARD or humidity < SENTINEL_GUARD:
        sensor_valid = temp_ok = hum_ok = False

    return RangeCheck(sensor_valid=sensor_valid, temperature_in_range=temp_ok, humidity_in_range=hum_ok)


def build_reading(
    *,
    temperature: float,
    humidity: float,
    checks: RangeCheck,
    status_byte: int,
    sensor_id: int,
    bytes_received: int,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Reading:
    warnings: list[str] = []
    if not checks.temperature_valid:
        warnings.append(TEMPERATURE_WARNING)
    if not checks.humidity_valid:
        warnings.append(HUMIDITY_WARNING)

    meta = metadata or {}
    return Reading(
        temperature=temperature,
        temperature_valid=checks.temperature_valid,
        humidity=humidity,
        humidity_valid=checks.humidity_valid,
        sensor_type=classify_sensor(sensor_id),
        sensor_id=sensor_id,
        status_byte=status_byte,
        bytes_received=bytes_received,
        rssi=meta.get("rssi"),
        snr=meta.get("snr"),
        warnings=tuple(warnings),
        errors=(),
    )


def decode_frame(payload: Optional[Payload], metadata: Optional[Mapping[str, Any]] = None) -> DecodeResult:
    """
    Decode one uplink frame.

    Empty or missing payloads give NoData, frames under 6 bytes give ShortFrame,
    anything else is decoded from its first 6 bytes (trailing bytes are ignored)
    into a Reading. Bad type or byte values raise TypeError / ValueError.
    """
    frame = _as_bytes(payload)
    early = validate_frame(frame)
    if early is not None:
        return early

    temperature = decode_temperature(frame[0], frame[1])
    humidity = decode_humidity(frame[2], frame[3])
    status_byte, sensor_id = frame[4], frame[5]
    checks = check_ranges(temperature, humidity, status_byte)

    reading = build_reading(
        temperature=temperature,
        humidity=humidity,
        checks=checks,
        status_byte=status_byte,
        sensor_id=sensor_id,
        bytes_received=len(frame),
        metadata=metadata,
    )
    if reading.warnings:
        logger.info("Uplink %s flagged: %s", frame[:FRAME_LEN].hex().upper(), "; ".join(reading.warnings))
    else:
        logger.debug("Uplink %s decoded: %.1f°C %.1f%%", frame[:FRAME_LEN].hex().upper(), temperature, humidity)
    return reading


def decode_uplink(uplink: Mapping[str, Any]) -> dict:
    """Formatter entry point: {"bytes": [...], "metadata": {...}} in, output-contract dict out."""
    return decode_frame(uplink.get("bytes"), uplink.get("metadata")).to_dict()
