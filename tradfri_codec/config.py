from dataclasses import dataclass, field
import logging

import yaml


log = logging.getLogger(__name__)

RULE_ON = "on"
RULE_BRIGHTNESS = "brightness"
RULE_RGB = "rgb"
RULE_PASSTHROUGH = "passthrough"
RULE_TYPES = [RULE_ON, RULE_BRIGHTNESS, RULE_RGB, RULE_PASSTHROUGH]

COLOR_ENCODING_RGB = "rgb"
COLOR_ENCODING_XY = "xy"
COLOR_ENCODINGS = [COLOR_ENCODING_RGB, COLOR_ENCODING_XY]

# Property names as used by the home automation bridge.
DEFAULT_PROPERTIES = {
    "on": RULE_ON,
    "brightness": RULE_BRIGHTNESS,
    "RGB": RULE_RGB,
}


@dataclass
class CodecConfig:
    name: str
    color_encoding: str = COLOR_ENCODING_RGB
    properties: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PROPERTIES)
    )


def load_config(path) -> list[CodecConfig]:
    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f)
    return parse_config(config)


def parse_config(config) -> list[CodecConfig]:
    assert config is not None and "codecs" in config

    codec_configs = []
    for codec_config in config["codecs"]:
        codec_configs.append(parse_codec_config(codec_config))

    names = [codec_config.name for codec_config in codec_configs]
    assert len(names) == len(set(names)), f"duplicate codec names: {names}"
    return codec_configs


def parse_codec_config(codec_config) -> CodecConfig:
    assert "name" in codec_config
    name = codec_config["name"]

    color_encoding = codec_config.get("color_encoding", COLOR_ENCODING_RGB)
    assert color_encoding in COLOR_ENCODINGS, f"{name}: {color_encoding=}"

    property_configs = codec_config.get("properties")
    if property_configs is None:
        properties = dict(DEFAULT_PROPERTIES)
    else:
        properties = {}
        for property_config in property_configs:
            property_name = property_config["name"]
            rule_type = property_config["type"]
            # YAML reads a bare `on` as True, so it has to be quoted.
            assert isinstance(property_name, str), f"{name}: {property_name=}"
            assert property_name not in properties, f"{name}: {property_name=}"
            assert rule_type in RULE_TYPES, f"{name}: {rule_type=}"
            properties[property_name] = rule_type

    log.debug(f"parse_codec_config({name=}, {color_encoding=}, {properties=})")
    return CodecConfig(
        name=name,
        color_encoding=color_encoding,
        properties=properties,
    )
