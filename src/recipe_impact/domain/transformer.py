"""
レコード変換ロジック

パース済みの RawRecord を、一覧チャート用の ComparisonRecord と
詳細ビュー用の DetailRecord に変換します。
欠損・非数値の指標値は 0、欠損したレシピ名は空文字として扱います。
"""

import logging
from typing import List, Optional, Sequence

from .derived_values import DerivedValueEngine
from .metric_registry import MetricRegistry, default_registry
from .models import ComparisonRecord, DetailRecord, FieldValue, RawRecord, RecipePair
from .parser import DatasetParser


logger = logging.getLogger(__name__)


class RecordNotFoundError(IndexError):
    """
    レコード未検出エラー

    一覧の index に対応するレコードがパース済みシーケンスに存在しない場合に送出されます。
    """

    def __init__(self, index: int, size: int):
        """
        Args:
            index: 要求された位置
            size: シーケンスの件数
        """
        super().__init__(f"レシピが見つかりません: index={index} (件数: {size})")
        self.index = index
        self.size = size


class RecordTransformer:
    """
    レコード変換クラス

    指標の列名は MetricRegistry から解決します。
    出力は入力と同じ順序・同じ件数で、index の振り直しや並び替えは行いません。
    """

    ANIMAL_RECIPE_COLUMN = "animal_recipe"
    ANIMAL_RECIPE_ID_COLUMN = "animal_recipe_ID"
    PLANT_RECIPE_COLUMN = "plant_recipe"
    PLANT_RECIPE_ID_COLUMN = "plant_recipe_ID"

    def __init__(self, registry: Optional[MetricRegistry] = None):
        """
        Args:
            registry: 指標レジストリ。None の場合は既定のレジストリを使用
        """
        self.registry = registry or default_registry()
        self._defaulted_count = 0

    def to_overview(
        self, records: Sequence[RawRecord], metric_name: str
    ) -> List[ComparisonRecord]:
        """
        1 指標分の一覧チャート用レコードを生成

        Args:
            records: パース済みレコード
            metric_name: レジストリに登録された指標名

        Returns:
            List[ComparisonRecord]: records と同じ件数・順序の比較レコード

        Raises:
            UnknownMetricError: 未登録の指標名の場合 (レコードは一切処理しない)
        """
        metric = self.registry.get(metric_name)

        self._defaulted_count = 0
        result = [
            ComparisonRecord(
                index=index,
                animal_value=self._numeric(record, metric.animal_column, index),
                plant_value=self._numeric(record, metric.plant_column, index),
                animal_label=self._text(record, self.ANIMAL_RECIPE_COLUMN, index),
                plant_label=self._text(record, self.PLANT_RECIPE_COLUMN, index),
            )
            for index, record in enumerate(records)
        ]
        self._log_defaults(metric_name)
        return result

    def to_detail(self, record: RawRecord, index: Optional[int] = None) -> List[DetailRecord]:
        """
        1 レシピ対の全指標分の詳細レコードを生成

        Args:
            record: パース済みレコード 1 件
            index: ログ用のデータセット上の位置

        Returns:
            List[DetailRecord]: レジストリの登録順に 1 指標 1 件
        """
        self._defaulted_count = 0
        details = []
        for metric in self.registry:
            animal_value = self._numeric(record, metric.animal_column, index)
            plant_value = self._numeric(record, metric.plant_column, index)
            details.append(
                DetailRecord(
                    metric_name=metric.display_name,
                    animal_value=animal_value,
                    plant_value=plant_value,
                    unit=metric.unit,
                    animal_normalized=DerivedValueEngine.normalize(animal_value),
                    plant_normalized=DerivedValueEngine.normalize(plant_value),
                    summary=metric.summary,
                )
            )
        self._log_defaults("detail")
        return details

    def to_recipe_pair(self, record: RawRecord, index: int) -> RecipePair:
        """
        詳細ビュー見出し用のレシピ対を生成

        数値として読み込まれた ID もデータセット上の表記 ("007" など) のまま返します。
        """
        self._defaulted_count = 0
        pair = RecipePair(
            index=index,
            animal_recipe=self._text(record, self.ANIMAL_RECIPE_COLUMN, index),
            animal_recipe_id=self._text(record, self.ANIMAL_RECIPE_ID_COLUMN, index),
            plant_recipe=self._text(record, self.PLANT_RECIPE_COLUMN, index),
            plant_recipe_id=self._text(record, self.PLANT_RECIPE_ID_COLUMN, index),
        )
        self._log_defaults("recipe pair")
        return pair

    @staticmethod
    def select(records: Sequence[RawRecord], index: int) -> RawRecord:
        """
        一覧の index に対応するレコードを取得

        Raises:
            RecordNotFoundError: index が負、または件数以上の場合
        """
        if index < 0 or index >= len(records):
            raise RecordNotFoundError(index, len(records))
        return records[index]

    def _numeric(self, record: RawRecord, column: str, index: Optional[int]) -> float:
        """
        指標値を float で取得

        列が存在しない、値が欠損 (None)・非数値の場合は 0.0 を返します。
        """
        value = record.get(column)
        if isinstance(value, str):
            value = DatasetParser.coerce_value(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        self._record_default(column, index, value)
        return 0.0

    def _text(self, record: RawRecord, column: str, index: Optional[int]) -> str:
        """
        テキスト値を取得

        数値として読み込まれた値は元の表記を返し、欠損は空文字を返します。
        """
        value = record.get(column)
        if value is None:
            self._record_default(column, index, value)
            return ""
        text = record.text(column)
        if text is not None:
            return text
        # 元の表記を持たないレコード (直接生成されたもの) の数値
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def _record_default(self, column: str, index: Optional[int], value: FieldValue) -> None:
        self._defaulted_count += 1
        logger.debug(
            f"Missing field defaulted: column={column!r} index={index}",
            extra={"column": column, "index": index, "raw_value": value},
        )

    def _log_defaults(self, context: str) -> None:
        if self._defaulted_count:
            logger.warning(
                f"{self._defaulted_count} missing or non-numeric fields defaulted ({context})",
                extra={"defaulted_count": self._defaulted_count},
            )
