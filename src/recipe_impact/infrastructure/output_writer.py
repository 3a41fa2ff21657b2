"""JSON 出力コンポーネント"""

from typing import Any, Dict, List, Optional
from pathlib import Path
import json
import math
import re
from datetime import datetime, timezone

from ..domain.derived_values import DerivedValueEngine
from ..domain.models import ComparisonRecord, DetailRecord, Metric, RecipePair


class OutputWriter:
    """
    比較レコードを表示層向け JSON として出力

    Responsibilities:
    - 一覧チャート用 (ComparisonRecord) と詳細ビュー用 (DetailRecord) の書き込み
    - 非有限値を null と表示可否フラグに変換 (NaN / Infinity は出力しない)
    - 出力先ディレクトリ管理
    """

    OUTPUT_DIR = Path("output")

    def __init__(self, output_dir: Optional[Path] = None):
        """
        OutputWriter を初期化

        Args:
            output_dir: 出力ディレクトリ。None の場合は "output" を使用
        """
        self.output_dir = Path(output_dir) if output_dir else self.OUTPUT_DIR

    def write_overview(self, metric: Metric, records: List[ComparisonRecord]) -> Path:
        """
        1 指標分の一覧データを JSON ファイルに出力

        Args:
            metric: 対象指標
            records: to_overview() の結果 (空でも可)

        Returns:
            Path: 出力ファイルパス (overview_<指標名>.json)
        """
        output_data = {
            "generated_at": self._get_current_timestamp(),
            "metric": {
                "name": metric.display_name,
                "unit": metric.unit,
                "description": metric.description,
                "animal_color": metric.animal_color,
                "plant_color": metric.plant_color,
            },
            "total_count": len(records),
            "records": [self._finite_dump(record.model_dump()) for record in records],
        }
        return self._write(f"overview_{self._slugify(metric.display_name)}.json", output_data)

    def write_detail(self, pair: RecipePair, details: List[DetailRecord]) -> Path:
        """
        1 レシピ対の詳細データを JSON ファイルに出力

        Args:
            pair: レシピ対の見出し情報
            details: to_detail() の結果

        Returns:
            Path: 出力ファイルパス (recipe_<index>.json)
        """
        metrics = []
        for detail in details:
            item = self._finite_dump(detail.model_dump())
            item.update(
                {
                    "animal_available": detail.animal_available,
                    "plant_available": detail.plant_available,
                    "reduction": self._finite_or_none(detail.reduction),
                    "reduction_available": detail.reduction_available,
                    "reduction_label": detail.reduction_label,
                }
            )
            metrics.append(item)

        radial = DerivedValueEngine.radial_points(details)
        output_data = {
            "generated_at": self._get_current_timestamp(),
            "recipe": pair.model_dump(),
            "metrics": metrics,
            "radial_metrics": [detail.metric_name for detail in radial],
        }
        return self._write(f"recipe_{pair.index}.json", output_data)

    def _write(self, filename: str, output_data: Dict[str, Any]) -> Path:
        # ディレクトリ自動作成
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_file = self.output_dir / filename

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(output_data, f, ensure_ascii=False, indent=2, allow_nan=False)

        return output_file

    @classmethod
    def _finite_dump(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: cls._finite_or_none(value) if isinstance(value, float) else value
            for key, value in data.items()
        }

    @staticmethod
    def _finite_or_none(value: float) -> Optional[float]:
        return value if math.isfinite(value) else None

    @staticmethod
    def _slugify(name: str) -> str:
        """
        指標名をファイル名用に変換

        例: "Stress-Weighted Water Use" → "stress_weighted_water_use"
        """
        return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")

    def _get_current_timestamp(self) -> str:
        """
        現在時刻を ISO 8601 形式で取得

        Returns:
            str: ISO 8601 形式のタイムスタンプ（UTC、Z サフィックス付き）
        """
        return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
