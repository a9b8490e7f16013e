from pathlib import Path

import pytest
import yaml

from .codec import Codec
from .config import DEFAULT_PROPERTIES, CodecConfig, load_config, parse_config

TEST_CONFIG_PATH = Path(__file__).parent / "test_config.yaml"


def test_load_config():
    codec_configs = load_config(TEST_CONFIG_PATH)

    assert codec_configs == [
        CodecConfig(
            name="living_room_bulb",
            color_encoding="rgb",
            properties=DEFAULT_PROPERTIES,
        ),
        CodecConfig(
            name="hallway_bulb",
            color_encoding="xy",
            properties={
                "on": "on",
                "brightness": "brightness",
                "RGB": "rgb",
                "colorTemperature": "passthrough",
            },
        ),
    ]


def test_codecs_from_config():
    codecs = [
        Codec.from_config(codec_config)
        for codec_config in load_config(TEST_CONFIG_PATH)
    ]
    info = {"topic": "zigbee2mqtt/bulb/set", "property": "colorTemperature"}
    assert codecs[0].encode("370", info) == "370"
    assert codecs[1].encode("370", info) == "370"

    info = {"topic": "zigbee2mqtt/bulb/set", "property": "on"}
    assert codecs[0].encode(True, info) == '{"state":"ON"}'
    assert codecs[1].encode(True, info) == '{"state":"ON"}'


def test_default_properties_not_shared():
    codec_config = parse_config({"codecs": [{"name": "bulb"}]})[0]
    codec_config.properties["RGB"] = "passthrough"
    assert DEFAULT_PROPERTIES["RGB"] == "rgb"


def test_unquoted_on():
    config = yaml.safe_load(
        """
codecs:
  - name: bulb
    properties:
      - name: on
        type: on
"""
    )
    with pytest.raises(AssertionError):
        parse_config(config)


def test_invalid_config():
    invalid_configs = [
        None,
        {},
        {"codecs": [{"color_encoding": "rgb"}]},
        {"codecs": [{"name": "bulb", "color_encoding": "hsv"}]},
        {"codecs": [{"name": "bulb"}, {"name": "bulb"}]},
        {
            "codecs": [
                {
                    "name": "bulb",
                    "properties": [{"name": "dim", "type": "dimmer"}],
                }
            ]
        },
        {
            "codecs": [
                {
                    "name": "bulb",
                    "properties": [
                        {"name": "on", "type": "on"},
                        {"name": "on", "type": "passthrough"},
                    ],
                }
            ]
        },
    ]
    for config in invalid_configs:
        with pytest.raises(AssertionError):
            parse_config(config)
