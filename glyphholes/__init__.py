# glyphholes/__init__.py

# I/O
from .io_save_load import load_gray, save_json

# Errors
from .errors import GlyphHolesError, DecodeError, InvalidShapeError, ConfigError

# Core: binarise -> fill -> classify
from .binarise import binarise, otsu
from .topology import (
    Shape,
    neighbours,
    fill_hole,
    fill_shape,
    fill_exterior,
)
from .classify import (
    Tallies,
    ShapeScan,
    count_shapes,
    classify,
)

# Reference counts (scikit-image)
from .features import holes_count, shape_hole_counts

# Configuration & reporting
from .config import Settings, load_config, update_config, settings_from_dict
from .report import label_counts, format_report

# Pipeline
from .pipeline import count_image, count_glob
