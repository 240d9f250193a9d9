import base64
import binascii
from typing import Annotated, Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Byte = Annotated[int, Field(ge=0, le=255)]
Number = Union[int, float]


class UplinkMetadata(BaseModel):
    rssi: Optional[Number] = Field(default=None, validation_alias=AliasChoices("rssi", "channel_rssi"))
    snr: Optional[Number] = None
    model_config = ConfigDict(extra="ignore")


class DecodeRequest(BaseModel):
    payload: Optional[list[Byte]] = Field(default=None, validation_alias=AliasChoices("bytes", "payload"))
    metadata: Optional[UplinkMetadata] = None

    def metadata_dict(self) -> Optional[dict[str, Any]]:
        if self.metadata is None:
            return None
        return self.metadata.model_dump()


class EndDeviceIds(BaseModel):
    device_id: str
    dev_eui: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class UplinkMessage(BaseModel):
    f_port: Optional[int] = None
    frm_payload: Optional[str] = None
    rx_metadata: list[UplinkMetadata] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore")


class TtnUplink(BaseModel):
    """The parts of a The Things Stack v3 uplink webhook we read."""

    end_device_ids: EndDeviceIds
    uplink_message: UplinkMessage
    model_config = ConfigDict(extra="ignore")

    def payload_bytes(self) -> bytes:
        """Base64 frm_payload -> raw bytes. Raises ValueError on bad base64."""
        raw = self.uplink_message.frm_payload
        if not raw:
            return b""
        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"frm_payload is not valid base64: {exc}") from exc

    def best_metadata(self) -> Optional[dict[str, Any]]:
        """rssi/snr of the gateway that heard the uplink loudest."""
        gateways = self.uplink_message.rx_metadata
        if not gateways:
            return None
        heard = [g for g in gateways if g.rssi is not None]
        best = max(heard, key=lambda g: g.rssi) if heard else gateways[0]
        return best.model_dump()
