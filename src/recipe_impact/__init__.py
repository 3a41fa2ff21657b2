"""
recipe-impact

動物性レシピと植物性レシピの環境負荷指標を比較するためのデータパイプラインです。
表示層から利用する基本操作をパッケージ直下で提供します。
"""

from typing import List, Sequence

from .domain.derived_values import DerivedValueEngine
from .domain.metric_registry import UnknownMetricError, default_registry
from .domain.models import ComparisonRecord, DetailRecord, Metric, RawRecord
from .domain.parser import DatasetParser, DatasetParseError
from .domain.transformer import RecordTransformer, RecordNotFoundError


def parse(text: str) -> List[RawRecord]:
    """CSV テキストを RawRecord のリストに変換"""
    return DatasetParser.parse(text)


def to_overview(records: Sequence[RawRecord], metric_name: str) -> List[ComparisonRecord]:
    """1 指標分の一覧チャート用レコードを生成"""
    return RecordTransformer().to_overview(records, metric_name)


def to_detail(record: RawRecord) -> List[DetailRecord]:
    """1 レシピ対の全指標分の詳細レコードを生成"""
    return RecordTransformer().to_detail(record)


def list_metrics() -> List[Metric]:
    """登録順の指標リスト"""
    return default_registry().list_metrics()


def normalize(value: float) -> float:
    """ln(value)。0 以下では非有限"""
    return DerivedValueEngine.normalize(value)


def reduction(animal: float, plant: float) -> float:
    """削減率 (%)。animal が 0 の場合は非有限"""
    return DerivedValueEngine.reduction(animal, plant)


__all__ = [
    "parse",
    "to_overview",
    "to_detail",
    "list_metrics",
    "normalize",
    "reduction",
    "RawRecord",
    "Metric",
    "ComparisonRecord",
    "DetailRecord",
    "DatasetParseError",
    "UnknownMetricError",
    "RecordNotFoundError",
]
