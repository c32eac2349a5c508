from __future__ import annotations

import numbers
from typing import Any

import numpy as np
from donfig import Config

config = Config(
    "axisarray",
    defaults=[
        {
            "display": {
                "axis_threshold": 10,
                "edgeitems": 3,
                "slice_threshold": 10,
                "linewidth": 80,
                "threshold": 1000,
            },
            "array": {"default_dtype": "float64"},
        }
    ],
)


def parse_count(data: Any, name: str) -> int:
    if isinstance(data, numbers.Integral) and not isinstance(data, bool) and data >= 0:
        return int(data)
    msg = f"Expected a non-negative integer for {name!r}, got {data!r} instead."
    raise ValueError(msg)


def parse_dtype(data: Any) -> np.dtype:
    try:
        return np.dtype(data)
    except TypeError as e:
        msg = f"Expected a numpy dtype for 'array.default_dtype', got {data!r} instead."
        raise ValueError(msg) from e


def display_options() -> dict[str, int]:
    """Read and validate the ``display`` section of the configuration."""
    return {
        key: parse_count(config.get(f"display.{key}"), f"display.{key}")
        for key in ("axis_threshold", "edgeitems", "slice_threshold", "linewidth", "threshold")
    }


def default_dtype() -> np.dtype:
    return parse_dtype(config.get("array.default_dtype"))
