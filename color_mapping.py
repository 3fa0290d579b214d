import numpy as np

MAGNETIC_MAX_RANGE = 50
LIGHT_VALUE_INDEX = 2


def sensor_range_to_color_component(value: float, max_value: float = MAGNETIC_MAX_RANGE) -> int:
    """Map a sensor reading onto a color component in [0..255].

    The magnitude is clamped to ``max_value`` and rescaled linearly,
    rounding halves up (25 of 50 gives 128).
    """
    value = np.nan_to_num(float(value), nan=0.0, posinf=max_value, neginf=-max_value)
    value = np.clip(value, -max_value, max_value)
    return int(np.floor(abs(value) * 255 / max_value + 0.5))


def magnetic_to_color(x: float, y: float, z: float, max_value: float = MAGNETIC_MAX_RANGE) -> tuple[int, int, int]:
    return (
        sensor_range_to_color_component(x, max_value),
        sensor_range_to_color_component(y, max_value),
        sensor_range_to_color_component(z, max_value)
    )


def light_to_background(values, clamp: bool = True) -> tuple[int, int, int]:
    component = 255 - int(values[LIGHT_VALUE_INDEX])
    if clamp:
        component = min(max(component, 0), 255)
    return (component, component, component)


def to_hex(color: tuple[int, int, int]) -> str:
    r, g, b = (min(max(int(c), 0), 255) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"
