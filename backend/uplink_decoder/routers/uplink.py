import logging

from fastapi import APIRouter, HTTPException

from ..decoder import decode_frame
from ..schemas import DecodeRequest, TtnUplink

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uplink"])


@router.post("/decode")
def decode(req: DecodeRequest):
    return decode_frame(req.payload, req.metadata_dict()).to_dict()


@router.post("/uplink")
def uplink(msg: TtnUplink):
    device_id = msg.end_device_ids.device_id
    try:
        frame = msg.payload_bytes()
    except ValueError as exc:
        logger.warning("Rejecting uplink from %s: %s", device_id, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = decode_frame(frame, msg.best_metadata())
    return {
        "device_id": device_id,
        "f_port": msg.uplink_message.f_port,
        "result": result.to_dict(),
    }
