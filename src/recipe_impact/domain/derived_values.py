"""
派生値計算ロジック

指標値の対数正規化と削減率の計算、および表示用の整形を提供します。
0 以下の値や 0 除算による非有限値は補正せず、そのまま返します。
呼び出し側は is_available() で判定し、チャートから除外してください。
"""

import math
from typing import Iterable, List


class DerivedValueEngine:
    """
    派生値計算クラス

    単位の異なる指標 (g, L, m²) を同じ対数スケールに載せるための正規化と、
    動物性 → 植物性の削減率を計算する静的メソッドを提供します。
    """

    UNDEFINED_LABEL = "undefined"
    UNAVAILABLE_LABEL = "unavailable"

    @staticmethod
    def normalize(value: float) -> float:
        """
        値を自然対数で正規化

        Args:
            value: 指標の生値

        Returns:
            float: ln(value)。0 の場合は -inf、負値・NaN の場合は nan
        """
        if math.isnan(value) or value < 0:
            return math.nan
        if value == 0:
            return -math.inf
        return math.log(value)

    @staticmethod
    def reduction(animal: float, plant: float) -> float:
        """
        削減率 (%) を計算

        (animal - plant) / animal * 100

        Args:
            animal: 動物性レシピの値
            plant: 植物性レシピの値

        Returns:
            float: 削減率。animal が 0 の場合は nan または ±inf
        """
        numerator = animal - plant
        if animal == 0:
            if numerator == 0 or math.isnan(numerator):
                return math.nan
            return math.copysign(math.inf, numerator)
        return numerator / animal * 100

    @staticmethod
    def is_available(value: float) -> bool:
        """派生値を表示してよいか (有限値か) を判定"""
        return math.isfinite(value)

    @staticmethod
    def format_reduction(value: float, digits: int = 1) -> str:
        """
        削減率を表示用文字列に整形

        Args:
            value: reduction() の結果
            digits: 小数点以下の桁数

        Returns:
            str: "50.0%" 形式。非有限値の場合は "undefined"
        """
        if not DerivedValueEngine.is_available(value):
            return DerivedValueEngine.UNDEFINED_LABEL
        return f"{value:.{digits}f}%"

    @staticmethod
    def format_value(value: float, unit: str, digits: int = 2) -> str:
        """
        生値を単位付き文字列に整形

        Returns:
            str: "12.35 g/100g" 形式。非有限値の場合は "unavailable"
        """
        if not DerivedValueEngine.is_available(value):
            return DerivedValueEngine.UNAVAILABLE_LABEL
        return f"{value:.{digits}f} {unit}"

    @staticmethod
    def radial_points(details: Iterable) -> List:
        """
        レーダー/比較チャートに描画できる詳細レコードのみを抽出

        動物性・植物性の正規化値がともに有限のものだけを、元の順序のまま返します。

        Args:
            details: DetailRecord の列

        Returns:
            List: 描画可能な DetailRecord のリスト
        """
        return [
            detail
            for detail in details
            if math.isfinite(detail.animal_normalized)
            and math.isfinite(detail.plant_normalized)
        ]
