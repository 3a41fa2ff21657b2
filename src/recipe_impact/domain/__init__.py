"""
ドメイン層

データセットのパース、指標レジストリ、レコード変換、派生値計算を提供します。
"""

from .models import RawRecord, Metric, ComparisonRecord, DetailRecord, RecipePair
from .parser import DatasetParser, DatasetParseError
from .metric_registry import MetricRegistry, UnknownMetricError, default_registry
from .transformer import RecordTransformer, RecordNotFoundError
from .derived_values import DerivedValueEngine

__all__ = [
    "RawRecord",
    "Metric",
    "ComparisonRecord",
    "DetailRecord",
    "RecipePair",
    "DatasetParser",
    "DatasetParseError",
    "MetricRegistry",
    "UnknownMetricError",
    "default_registry",
    "RecordTransformer",
    "RecordNotFoundError",
    "DerivedValueEngine",
]
