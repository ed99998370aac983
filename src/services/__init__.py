from .normalizer import Normalizer, TrackingReferenceGenerator, normalize
from .record_store import RecordStore
from .session import ManifestSession

__all__ = [
    "ManifestSession",
    "Normalizer",
    "RecordStore",
    "TrackingReferenceGenerator",
    "normalize",
]
