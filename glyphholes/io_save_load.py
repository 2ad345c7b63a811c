# io_save_load.py
# load/save helpers

from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError
import numpy as np, pathlib as _p

from .errors import DecodeError


def load_gray(path: str) -> np.ndarray:
    """Decode any Pillow-readable image into an (H,W) uint8 luminance matrix."""
    if not path:
        raise DecodeError(str(path), "empty path")
    try:
        with Image.open(path) as img:
            return np.array(img.convert('L'), dtype=np.uint8)
    except FileNotFoundError as e:
        raise DecodeError(path, "no such file") from e
    except UnidentifiedImageError as e:
        raise DecodeError(path, "unrecognised image format") from e
    except (OSError, ValueError, DecompressionBombError) as e:
        raise DecodeError(path, str(e)) from e


def save_json(path: str, obj: dict):
    import json, os
    _p.Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f: json.dump(obj, f, ensure_ascii=False, indent=2)
