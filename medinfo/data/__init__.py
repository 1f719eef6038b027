"""
Local medicine data.
"""

from .sample_medicines import SAMPLE_MEDICINES, MedicineDataStore, normalize_name

__all__ = ["SAMPLE_MEDICINES", "MedicineDataStore", "normalize_name"]
