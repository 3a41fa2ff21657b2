"""
RecordTransformer のユニットテスト

一覧用・詳細用レコードへの変換、欠損値の既定値、index の安定性を検証します。
"""
import math
from unittest.mock import MagicMock

import pytest

from src.recipe_impact.domain.metric_registry import (
    MetricRegistry,
    UnknownMetricError,
    default_registry,
)
from src.recipe_impact.domain.models import Metric, RawRecord
from src.recipe_impact.domain.parser import DatasetParser
from src.recipe_impact.domain.transformer import RecordNotFoundError, RecordTransformer


@pytest.fixture
def transformer():
    """既定レジストリの RecordTransformer"""
    return RecordTransformer()


@pytest.fixture
def records(sample_csv_text):
    """パース済みサンプルレコード"""
    return DatasetParser.parse(sample_csv_text)


class TestToOverview:
    """to_overview のテスト"""

    @pytest.mark.parametrize("metric_name", default_registry().names())
    def test_length_and_index_order(self, transformer, records, metric_name):
        """出力件数が入力と一致し、index が 0..n-1 の順に並ぶこと"""
        overview = transformer.to_overview(records, metric_name)

        assert len(overview) == len(records)
        assert [r.index for r in overview] == list(range(len(records)))

    def test_values_for_metric(self, transformer, records):
        """指標の列から値が取り出されること"""
        overview = transformer.to_overview(records, "GHG Emission")

        assert overview[0].animal_value == 1200.5
        assert overview[0].plant_value == 150.25
        assert overview[1].animal_value == 500.0

    def test_values_switch_with_metric(self, transformer, records):
        """指標を切り替えると別の列の値になること"""
        overview = transformer.to_overview(records, "Land Use")

        assert overview[0].animal_value == 15.0
        assert overview[0].plant_value == 2.5

    def test_labels_copied_verbatim(self, transformer, records):
        """レシピ名がそのままコピーされること"""
        overview = transformer.to_overview(records, "Nitrogen Lost")

        assert overview[0].animal_label == "Beef Chili"
        assert overview[0].plant_label == "Bean Chili"
        assert overview[2].plant_label == "Salad, Chickpea"

    def test_values_are_float(self, transformer, records):
        """値が float であること"""
        overview = transformer.to_overview(records, "Freshwater Withdrawals")

        assert all(isinstance(r.animal_value, float) for r in overview)
        assert all(isinstance(r.plant_value, float) for r in overview)

    def test_unknown_metric_touches_no_records(self, transformer):
        """未登録の指標では、レコードに一切触れずに UnknownMetricError が発生すること"""
        record = MagicMock(spec=RawRecord)

        with pytest.raises(UnknownMetricError):
            transformer.to_overview([record, record], "Not A Metric")

        assert record.method_calls == []
        assert not record.get.called

    def test_empty_records(self, transformer):
        """空入力には空リスト"""
        assert transformer.to_overview([], "GHG Emission") == []

    def test_missing_column_defaults_to_zero(self, transformer):
        """列が存在しない場合は 0"""
        records = [RawRecord(data={"animal_recipe": "Beef", "plant_recipe": "Tofu"})]

        overview = transformer.to_overview(records, "GHG Emission")

        assert overview[0].animal_value == 0.0
        assert overview[0].plant_value == 0.0
        assert overview[0].animal_label == "Beef"

    def test_non_numeric_value_defaults_to_zero(self, transformer):
        """非数値の値は 0"""
        records = [
            RawRecord(
                data={
                    "animal_GHG Emission (g) / 100g": "n/a",
                    "plant_GHG Emission (g) / 100g": "",
                }
            )
        ]

        overview = transformer.to_overview(records, "GHG Emission")

        assert overview[0].animal_value == 0.0
        assert overview[0].plant_value == 0.0

    def test_numeric_text_is_coerced(self, transformer):
        """数値として解釈できる文字列は float に変換されること"""
        records = [RawRecord(data={"animal_GHG Emission (g) / 100g": "12.5"})]

        overview = transformer.to_overview(records, "GHG Emission")

        assert overview[0].animal_value == 12.5

    def test_missing_labels_default_to_empty(self, transformer):
        """レシピ名がない場合は空文字"""
        overview = transformer.to_overview([RawRecord(data={})], "GHG Emission")

        assert overview[0].animal_label == ""
        assert overview[0].plant_label == ""

    def test_truncated_row_defaults(self, transformer, truncated_csv_text):
        """切り詰められた行の欠けた値が 0 として扱われること"""
        records = DatasetParser.parse(truncated_csv_text)

        assert len(records[1]) == len(records[0])
        overview = transformer.to_overview(records, "Land Use")

        assert overview[1].animal_value == 7.5
        assert overview[1].plant_value == 0.0

    def test_defaults_are_logged(self, transformer, caplog):
        """既定値の適用件数が WARNING で記録されること"""
        with caplog.at_level("WARNING"):
            transformer.to_overview([RawRecord(data={})], "GHG Emission")

        assert "defaulted" in caplog.text

    def test_input_order_is_not_resorted(self, transformer):
        """値の大小で並び替えないこと"""
        records = [
            RawRecord(data={"animal_GHG Emission (g) / 100g": value})
            for value in (3.0, 1.0, 2.0)
        ]

        overview = transformer.to_overview(records, "GHG Emission")

        assert [r.animal_value for r in overview] == [3.0, 1.0, 2.0]


class TestToDetail:
    """to_detail のテスト"""

    def test_one_record_per_metric_in_registry_order(self, transformer, records):
        """登録指標数と同じ件数が登録順に並ぶこと"""
        details = transformer.to_detail(records[0])

        assert len(details) == len(default_registry())
        assert [d.metric_name for d in details] == default_registry().names()

    def test_values_and_units(self, transformer, records):
        """生値と単位が指標ごとに設定されること"""
        details = transformer.to_detail(records[0])
        land_use = details[-1]

        assert land_use.animal_value == 15.0
        assert land_use.plant_value == 2.5
        assert land_use.unit == "m²/100g"
        assert land_use.summary == "Land area required per 100g"

    def test_normalized_is_natural_log(self, transformer, records):
        """正規化値が ln(値) であること"""
        for detail in transformer.to_detail(records[0]):
            assert detail.animal_normalized == pytest.approx(math.log(detail.animal_value))
            assert detail.plant_normalized == pytest.approx(math.log(detail.plant_value))

    def test_zero_value_is_not_coerced(self, transformer, records):
        """0 の値の正規化値は -inf のまま (表示不可) であること"""
        ghg = transformer.to_detail(records[2])[0]

        assert ghg.plant_value == 0.0
        assert ghg.plant_normalized == -math.inf
        assert not ghg.plant_available
        assert ghg.animal_available

    def test_custom_registry(self):
        """独自レジストリの指標のみが出力されること"""
        registry = MetricRegistry(
            [Metric(display_name="Only", animal_column="animal_x", plant_column="plant_x", unit="u")]
        )
        record = RawRecord(data={"animal_x": 4.0, "plant_x": 2.0})

        details = RecordTransformer(registry).to_detail(record)

        assert [d.metric_name for d in details] == ["Only"]
        assert details[0].reduction == 50.0


class TestToRecipePair:
    """to_recipe_pair のテスト"""

    def test_pair_from_record(self, transformer, records):
        """レシピ名と ID が文字列として取り出されること"""
        pair = transformer.to_recipe_pair(records[0], 0)

        assert pair.index == 0
        assert pair.animal_recipe == "Beef Chili"
        assert pair.animal_recipe_id == "101"
        assert pair.plant_recipe == "Bean Chili"
        assert pair.plant_recipe_id == "201"

    def test_non_integer_id_is_kept(self, transformer):
        """整数でない数値 ID はそのまま文字列化されること"""
        pair = transformer.to_recipe_pair(RawRecord(data={"animal_recipe_ID": 1.5}), 0)
        assert pair.animal_recipe_id == "1.5"

    def test_missing_fields(self, transformer):
        """欠損は空文字"""
        pair = transformer.to_recipe_pair(RawRecord(data={"animal_recipe": None}), 4)

        assert pair.index == 4
        assert pair.animal_recipe == ""
        assert pair.plant_recipe_id == ""

    def test_missing_fields_are_logged(self, transformer, caplog):
        """レシピ名・ID の欠損件数が WARNING で記録されること"""
        with caplog.at_level("WARNING"):
            transformer.to_recipe_pair(RawRecord(data={"x": 1.0}), 0)

        assert "4 missing or non-numeric fields defaulted (recipe pair)" in caplog.text

    def test_numeric_looking_text_keeps_source_notation(self, transformer):
        """数値として読み込まれた名前・ID がデータセット上の表記のまま返ること"""
        records = DatasetParser.parse(
            "animal_recipe,animal_recipe_ID,plant_recipe,plant_recipe_ID\n"
            "1.50,007,Infinity,1e3\n"
        )

        pair = transformer.to_recipe_pair(records[0], 0)

        assert pair.animal_recipe == "1.50"
        assert pair.animal_recipe_id == "007"
        assert pair.plant_recipe == "Infinity"
        assert pair.plant_recipe_id == "1e3"

        overview = transformer.to_overview(records, "GHG Emission")
        assert overview[0].animal_label == "1.50"
        assert overview[0].plant_label == "Infinity"


class TestSelect:
    """select (index による参照) のテスト"""

    def test_select_returns_same_record(self, records):
        """一覧の index が同じ位置のレコードに対応すること"""
        overview = RecordTransformer().to_overview(records, "GHG Emission")

        for row in overview:
            assert RecordTransformer.select(records, row.index) is records[row.index]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_select_out_of_range(self, records, index):
        """範囲外の index で RecordNotFoundError が発生すること"""
        with pytest.raises(RecordNotFoundError) as exc_info:
            RecordTransformer.select(records, index)

        assert exc_info.value.index == index
        assert exc_info.value.size == 3

    def test_record_not_found_is_index_error(self):
        """RecordNotFoundError は IndexError として捕捉できること"""
        assert issubclass(RecordNotFoundError, IndexError)
