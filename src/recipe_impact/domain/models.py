"""
データモデル定義

このモジュールは recipe-impact のドメイン層のデータモデルを定義します:
- RawRecord: データセット 1 行分の生データ (ヘッダー名 → 値)
- Metric: 動物性/植物性レシピを比較する環境指標
- ComparisonRecord: 一覧チャート用の 1 指標分の比較行
- DetailRecord: 詳細ビュー用の指標ごとの生値・正規化値
- RecipePair: 詳細ビュー見出し用のレシピ対
"""

import math
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .derived_values import DerivedValueEngine


# パーサーが格納する値の型 (数値・文字列・欠損)
FieldValue = Optional[Union[float, str]]


class RawRecord(BaseModel):
    """
    データセット 1 行分の生データ

    ヘッダー行の列名をキーとし、ヘッダー順に値を保持します。
    切り詰められた行の欠損値は None のまま保持され、既定値の適用は
    RecordTransformer が担当します。
    """

    model_config = ConfigDict(frozen=True)

    data: Dict[str, FieldValue] = Field(
        default_factory=dict, description="列名 → 値 (float / str / None)"
    )
    raw_text: Dict[str, str] = Field(
        default_factory=dict, description="数値に変換された値の元の文字列"
    )

    def __getitem__(self, key: str) -> FieldValue:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: FieldValue = None) -> FieldValue:
        return self.data.get(key, default)

    def keys(self) -> List[str]:
        return list(self.data)

    def text(self, key: str) -> Optional[str]:
        """数値に変換された値は元の文字列、それ以外は保持している値そのもの"""
        if key in self.raw_text:
            return self.raw_text[key]
        value = self.data.get(key)
        return value if isinstance(value, str) else None


class Metric(BaseModel):
    """
    環境指標の定義

    表示名と、動物性/植物性それぞれのソース列名、単位を保持します。
    色は表示層向けの情報で、計算には使用しません。
    """

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., description="表示名 (一意キー)")
    animal_column: str = Field(..., description="動物性レシピ側の列名")
    plant_column: str = Field(..., description="植物性レシピ側の列名")
    unit: str = Field(..., description="表示単位 (例: 'g/100g')")
    description: str = Field(default="", description="一覧チャートに添える説明文")
    summary: str = Field(default="", description="詳細カード用の短い説明")
    animal_color: str = Field(default="#ff6b6b", description="動物性系列の色")
    plant_color: str = Field(default="#51cf66", description="植物性系列の色")

    @field_validator("display_name", "unit")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """
        表示名・単位の空文字チェック

        Raises:
            ValueError: 空白のみの値が渡された場合
        """
        if not v.strip():
            raise ValueError("空の値は指定できません")
        return v

    @field_validator("animal_column")
    @classmethod
    def validate_animal_column(cls, v: str) -> str:
        """
        動物性列名のプレフィックス検証

        Raises:
            ValueError: 'animal_' で始まらない列名が渡された場合
        """
        if not v.startswith("animal_") or v == "animal_":
            raise ValueError(f"無効な動物性列名: {v!r}。'animal_' で始まる必要があります")
        return v

    @field_validator("plant_column")
    @classmethod
    def validate_plant_column(cls, v: str) -> str:
        """
        植物性列名のプレフィックス検証

        Raises:
            ValueError: 'plant_' で始まらない列名が渡された場合
        """
        if not v.startswith("plant_") or v == "plant_":
            raise ValueError(f"無効な植物性列名: {v!r}。'plant_' で始まる必要があります")
        return v


class ComparisonRecord(BaseModel):
    """
    一覧チャートの 1 行

    index はパース済みシーケンス上の位置で、詳細ビューへの遷移キーとして
    そのまま使われます。並び替え・再採番はしません。
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="データセット上の位置 (0 始まり)")
    animal_value: float = Field(..., description="動物性レシピの値")
    plant_value: float = Field(..., description="植物性レシピの値")
    animal_label: str = Field(default="", description="動物性レシピ名")
    plant_label: str = Field(default="", description="植物性レシピ名")


class DetailRecord(BaseModel):
    """
    詳細ビューの指標 1 件分

    正規化値は ln(値) で、0 以下の値では非有限になります。
    非有限値は強制変換せず、*_available フラグで表示可否を判定します。
    """

    model_config = ConfigDict(frozen=True)

    metric_name: str
    animal_value: float
    plant_value: float
    unit: str
    animal_normalized: float
    plant_normalized: float
    summary: str = ""

    @property
    def animal_available(self) -> bool:
        return math.isfinite(self.animal_normalized)

    @property
    def plant_available(self) -> bool:
        return math.isfinite(self.plant_normalized)

    @property
    def reduction(self) -> float:
        """動物性から植物性への削減率 (%)。animal_value が 0 なら非有限"""
        return DerivedValueEngine.reduction(self.animal_value, self.plant_value)

    @property
    def reduction_available(self) -> bool:
        return DerivedValueEngine.is_available(self.reduction)

    @property
    def reduction_label(self) -> str:
        return DerivedValueEngine.format_reduction(self.reduction)


class RecipePair(BaseModel):
    """詳細ビュー見出し用のレシピ対"""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    animal_recipe: str = ""
    animal_recipe_id: str = ""
    plant_recipe: str = ""
    plant_recipe_id: str = ""
