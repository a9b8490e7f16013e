from collections.abc import Callable, Mapping
from functools import partial
import json
import logging

from .chromaticity import cie_to_rgb, rgb_to_cie, round_half_up
from .config import (
    COLOR_ENCODING_RGB,
    COLOR_ENCODING_XY,
    COLOR_ENCODINGS,
    DEFAULT_PROPERTIES,
    RULE_BRIGHTNESS,
    RULE_ON,
    RULE_PASSTHROUGH,
    RULE_RGB,
    CodecConfig,
)
from .state import parse_device_state


log = logging.getLogger(__name__)

STATE_ON = "ON"
STATE_OFF = "OFF"

# Device brightness is [0, 254], automation brightness is [0, 100].
BRIGHTNESS_SCALE = 2.54


def encode_passthrough(message):
    return message


def decode_passthrough(message):
    return message


def encode_on(message: bool) -> str:
    return _dump({"state": STATE_ON if message else STATE_OFF})


def decode_on(message: str) -> bool | None:
    state = parse_device_state(message)
    if state.state:
        return state.state == STATE_ON
    return None


def encode_brightness(message: float) -> str:
    brightness = round_half_up(message * BRIGHTNESS_SCALE)
    # Zero brightness turns the light off.
    return _dump(
        {
            "state": STATE_ON if brightness else STATE_OFF,
            "brightness": brightness,
        }
    )


def decode_brightness(message: str) -> int | None:
    state = parse_device_state(message)
    if state.brightness:
        return round_half_up(state.brightness / BRIGHTNESS_SCALE)
    return None


def encode_rgb(message: str, color_encoding: str = COLOR_ENCODING_RGB) -> str:
    red, green, blue = [int(component) for component in message.split(",")]

    # Perceived luminance, not the CIE Y of the color.
    brightness = round_half_up(0.299 * red + 0.587 * green + 0.114 * blue)

    if color_encoding == COLOR_ENCODING_XY:
        point = rgb_to_cie(red, green, blue)
        color = {"x": point.x, "y": point.y}
    else:
        color = {"r": red, "g": green, "b": blue}

    return _dump(
        {
            "state": STATE_ON if brightness else STATE_OFF,
            "brightness": brightness,
            "color": color,
        }
    )


def decode_rgb(message: str) -> str | None:
    state = parse_device_state(message)
    if state.color is None:
        return None
    rgb = cie_to_rgb(state.color.x, state.color.y, state.brightness)
    return ",".join(str(channel) for channel in rgb)


def _dump(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"))


class Codec:
    """Translates the properties of one light between the two bridges.

    Properties without a rule of their own are passed through unchanged.
    """

    def __init__(
        self,
        name: str,
        log_fn: Callable[[str], None] | None = None,
        properties: Mapping[str, str] | None = None,
        color_encoding: str = COLOR_ENCODING_RGB,
    ) -> None:
        assert color_encoding in COLOR_ENCODINGS
        if properties is None:
            properties = DEFAULT_PROPERTIES

        self._name = name
        self._log_fn = log_fn if log_fn is not None else log.debug

        self._encoders = {}
        self._decoders = {}
        for property_name, rule_type in properties.items():
            if rule_type == RULE_ON:
                self._encoders[property_name] = encode_on
                self._decoders[property_name] = decode_on
            elif rule_type == RULE_BRIGHTNESS:
                self._encoders[property_name] = encode_brightness
                self._decoders[property_name] = decode_brightness
            elif rule_type == RULE_RGB:
                self._encoders[property_name] = partial(
                    encode_rgb, color_encoding=color_encoding
                )
                self._decoders[property_name] = decode_rgb
            elif rule_type == RULE_PASSTHROUGH:
                self._encoders[property_name] = encode_passthrough
                self._decoders[property_name] = decode_passthrough
            else:
                assert False, f"{name}: {property_name=}, {rule_type=}"

        self._log_fn(f"codec initialized with {name}.")

    @classmethod
    def from_config(
        cls,
        codec_config: CodecConfig,
        log_fn: Callable[[str], None] | None = None,
    ) -> "Codec":
        return cls(
            codec_config.name,
            log_fn=log_fn,
            properties=codec_config.properties,
            color_encoding=codec_config.color_encoding,
        )

    @property
    def name(self) -> str:
        return self._name

    def encode(self, message, info: Mapping[str, str], output=None):
        """Encodes a message before it is published to the device.

        Returns the encoded message. If given, output is called with it as
        well, unless there is nothing to publish.
        """
        self._log_fn(
            f"encode() called for topic [{info['topic']}], "
            f"property [{info['property']}] with message [{message}]"
        )
        encoder = self._encoders.get(info["property"], encode_passthrough)
        return self._deliver(encoder(message), output)

    def decode(self, message, info: Mapping[str, str], output=None):
        """Decodes a message received from the device.

        Returns None when the message carries no update for the property, in
        which case output is not called.
        """
        self._log_fn(
            f"decode() called for topic [{info['topic']}], "
            f"property [{info['property']}] with message [{message}]"
        )
        decoder = self._decoders.get(info["property"], decode_passthrough)
        return self._deliver(decoder(message), output)

    def _deliver(self, value, output):
        if value is not None and output is not None:
            output(value)
        return value
