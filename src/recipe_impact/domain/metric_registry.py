"""
指標レジストリ

指標の表示名からソース列名・単位・説明への静的な対応表を提供します。
登録順を保持し、指標選択コントロールの項目順としてそのまま使用できます。
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .models import Metric


class UnknownMetricError(KeyError):
    """
    未登録指標エラー

    レジストリに存在しない指標名が要求された場合に送出されます。
    既定の指標へのフォールバックは行いません。
    """

    def __init__(self, metric_name: str, available: Optional[List[str]] = None):
        """
        Args:
            metric_name: 要求された指標名
            available: 登録済みの指標名一覧
        """
        super().__init__(metric_name)
        self.metric_name = metric_name
        self.available = available or []

    def __str__(self) -> str:
        message = f"未登録の指標です: {self.metric_name!r}"
        if self.available:
            message += f" (利用可能: {', '.join(self.available)})"
        return message


class MetricRegistry:
    """
    読み取り専用の指標レジストリ

    構築時に指標定義を検証し、以降は変更しません。
    """

    def __init__(self, metrics: Iterable[Metric]):
        """
        Args:
            metrics: 登録順に並んだ指標定義

        Raises:
            ValueError: 指標が空、または表示名が重複している場合
        """
        self._metrics: Dict[str, Metric] = {}
        for metric in metrics:
            if metric.display_name in self._metrics:
                raise ValueError(f"指標名が重複しています: {metric.display_name!r}")
            self._metrics[metric.display_name] = metric

        if not self._metrics:
            raise ValueError("指標が 1 件も登録されていません")

    def get(self, metric_name: str) -> Metric:
        """
        表示名で指標を取得

        Raises:
            UnknownMetricError: 未登録の指標名の場合
        """
        try:
            return self._metrics[metric_name]
        except KeyError:
            raise UnknownMetricError(metric_name, self.names()) from None

    def list_metrics(self) -> List[Metric]:
        """登録順の指標リスト"""
        return list(self._metrics.values())

    def names(self) -> List[str]:
        """登録順の表示名リスト"""
        return list(self._metrics)

    def required_columns(self) -> List[str]:
        """全指標の列名 (指標ごとに動物性 → 植物性の順)"""
        columns = []
        for metric in self._metrics.values():
            columns.extend([metric.animal_column, metric.plant_column])
        return columns

    def missing_columns(self, headers: Iterable[str]) -> List[str]:
        """
        ヘッダーに存在しない指標列を返す

        Args:
            headers: データセットのヘッダー列名

        Returns:
            List[str]: 欠けている列名 (登録順)。該当列の値は 0 として扱われる
        """
        header_set = set(headers)
        return [column for column in self.required_columns() if column not in header_set]

    def __iter__(self) -> Iterator[Metric]:
        return iter(self._metrics.values())

    def __len__(self) -> int:
        return len(self._metrics)

    def __contains__(self, metric_name: object) -> bool:
        return metric_name in self._metrics


# 既定の指標定義 (データセットの列名はスペース・括弧・スラッシュを含めて完全一致)
DEFAULT_METRICS = [
    Metric(
        display_name="GHG Emission",
        animal_column="animal_GHG Emission (g) / 100g",
        plant_column="plant_GHG Emission (g) / 100g",
        unit="g/100g",
        description=(
            "Greenhouse gas (GHG) emissions contribute to climate change. Compare the GHG "
            "emissions of animal-based and plant-based recipes to find more environmentally "
            "friendly choices."
        ),
        summary="Greenhouse gas emissions per 100g of food",
    ),
    Metric(
        display_name="Nitrogen Lost",
        animal_column="animal_N lost (g) / 100g",
        plant_column="plant_N lost (g) / 100g",
        unit="g/100g",
        description=(
            "Nitrogen loss can harm ecosystems and water quality. Compare the nitrogen lost "
            "while producing animal-based and plant-based foods."
        ),
        summary="Nitrogen loss during production per 100g",
    ),
    Metric(
        display_name="Freshwater Withdrawals",
        animal_column="animal_Freshwater Withdrawals (L) / 100g",
        plant_column="plant_Freshwater Withdrawals (L) / 100g",
        unit="L/100g",
        description=(
            "Freshwater withdrawal measures the amount of water used in food production."
        ),
        summary="Water used in production per 100g",
    ),
    Metric(
        display_name="Stress-Weighted Water Use",
        animal_column="animal_Stress-Weighted Water Use (L) / 100g",
        plant_column="plant_Stress-Weighted Water Use (L) / 100g",
        unit="L/100g",
        description=(
            "Stress-weighted water use accounts for water drawn in areas of water scarcity, "
            "reflecting the pressure on local water resources."
        ),
        summary="Water use weighted by local scarcity",
    ),
    Metric(
        display_name="Land Use",
        animal_column="animal_Land Use (m^2) / 100g",
        plant_column="plant_Land Use (m^2) / 100g",
        unit="m²/100g",
        description=(
            "Land use indicates how much land is required to produce a food item. Reducing "
            "it helps preserve natural habitats and biodiversity."
        ),
        summary="Land area required per 100g",
    ),
]

_default_registry: Optional[MetricRegistry] = None


def default_registry() -> MetricRegistry:
    """既定の 5 指標を登録した共有レジストリを返す"""
    global _default_registry
    if _default_registry is None:
        _default_registry = MetricRegistry(DEFAULT_METRICS)
    return _default_registry
