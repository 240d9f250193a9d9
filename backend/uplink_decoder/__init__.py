from .decoder import decode_frame, decode_uplink
from .results import DecodeResult, NoData, Reading, ShortFrame

__all__ = ["decode_frame", "decode_uplink", "DecodeResult", "NoData", "Reading", "ShortFrame"]
