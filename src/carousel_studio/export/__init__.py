"""Export pipeline: asset loading, options, document assembly and scheduling."""

from .assets import AssetLoader, decode_data_url
from .options import ExportOptions, generate_filename
from .pipeline import ExportDocument, ExportPipeline
from .runner import ExportRunner

__all__ = [
    "AssetLoader",
    "decode_data_url",
    "ExportOptions",
    "generate_filename",
    "ExportDocument",
    "ExportPipeline",
    "ExportRunner",
]
