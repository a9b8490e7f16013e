from dataclasses import dataclass
import json


@dataclass
class ChromaticityPoint:
    x: float
    y: float


@dataclass
class DeviceState:
    state: str | None = None  # "ON" or "OFF"
    brightness: int | None = None  # Range: [0, 254]
    color: ChromaticityPoint | None = None


def parse_device_state(message: str) -> DeviceState:
    # Raises json.JSONDecodeError on malformed payloads.
    payload = json.loads(message)
    if not isinstance(payload, dict):
        return DeviceState()

    color = payload.get("color")
    if isinstance(color, dict):
        color = ChromaticityPoint(
            x=_coordinate(color, "x"),
            y=_coordinate(color, "y"),
        )
    elif color:
        color = ChromaticityPoint(x=float("nan"), y=float("nan"))
    else:
        color = None

    return DeviceState(
        state=payload.get("state"),
        brightness=payload.get("brightness"),
        color=color,
    )


def _coordinate(color: dict, key: str) -> float:
    # A missing coordinate is NaN, so the color converts to black. A null
    # coordinate counts as 0.
    if key not in color:
        return float("nan")
    value = color[key]
    if value is None:
        return 0.0
    return float(value)
