from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image


def _write_avatars(directory: Path, count: int, size: int = 128, seed: int = 0) -> list[Path]:
    """Write `count` solid gray avatars named 0.png, 1.png, ... into directory."""
    rng = np.random.default_rng(seed)
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for i in range(count):
        gray = int(rng.integers(0, 256))
        img = Image.new("L", (size, size), gray)
        path = directory / f"{i}.png"
        img.save(path)
        paths.append(path)
    return paths


@pytest.fixture
def make_avatars(tmp_path: Path) -> Callable[..., list[Path]]:
    def _make(count: int, size: int = 128, seed: int = 0, name: str = "avatars") -> list[Path]:
        return _write_avatars(tmp_path / name, count, size=size, seed=seed)

    return _make
