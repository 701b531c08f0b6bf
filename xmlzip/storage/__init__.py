"""Output storage for split archives."""

from xmlzip.storage.manifest import generate_manifest_dict, save_manifest
from xmlzip.storage.zip_sink import ZipArchiveSink

__all__ = ["ZipArchiveSink", "generate_manifest_dict", "save_manifest"]
