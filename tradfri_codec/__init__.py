from .state import ChromaticityPoint, DeviceState, parse_device_state
from .chromaticity import cie_to_rgb, rgb_to_cie
from .config import CodecConfig, load_config, parse_config
from .codec import (
    Codec,
    decode_brightness,
    decode_on,
    decode_passthrough,
    decode_rgb,
    encode_brightness,
    encode_on,
    encode_passthrough,
    encode_rgb,
)
