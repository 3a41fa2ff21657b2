"""
アプリケーション設定

環境変数から設定値を読み込みます。CLI 引数で個別に上書きできます。
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class AppConfig(BaseModel):
    """
    実行時設定

    環境変数:
        RECIPE_IMPACT_DATASET: データセットの URL またはファイルパス
        RECIPE_IMPACT_DEFAULT_METRIC: 既定の指標名
        RECIPE_IMPACT_OUTPUT_DIR: JSON 出力ディレクトリ
        RECIPE_IMPACT_OVERVIEW_LIMIT: 一覧に表示する件数 (未設定なら全件)
        RECIPE_IMPACT_HTTP_TIMEOUT: HTTP タイムアウト (秒)
        RECIPE_IMPACT_LOG_LEVEL: ログレベル
        SLACK_WEBHOOK_URL: 通知先 Slack webhook (未設定ならログのみ)
    """

    dataset: str = Field(default="data/similar_recipes.csv")
    default_metric: str = Field(default="GHG Emission")
    output_dir: str = Field(default="output")
    overview_limit: Optional[int] = Field(default=None, ge=1)
    http_timeout: float = Field(default=30.0, gt=0)
    log_level: str = Field(default="INFO")
    slack_webhook_url: str = Field(default="")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        ログレベルの検証

        Raises:
            ValueError: logging が解釈できないレベル名の場合
        """
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"無効なログレベル: {v}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        環境変数から設定を生成

        未設定・空文字の変数は既定値を使用します。

        Raises:
            ValidationError: 値が不正な場合
        """
        env = os.environ if environ is None else environ
        mapping = {
            "dataset": "RECIPE_IMPACT_DATASET",
            "default_metric": "RECIPE_IMPACT_DEFAULT_METRIC",
            "output_dir": "RECIPE_IMPACT_OUTPUT_DIR",
            "overview_limit": "RECIPE_IMPACT_OVERVIEW_LIMIT",
            "http_timeout": "RECIPE_IMPACT_HTTP_TIMEOUT",
            "log_level": "RECIPE_IMPACT_LOG_LEVEL",
            "slack_webhook_url": "SLACK_WEBHOOK_URL",
        }
        values = {field: env[name] for field, name in mapping.items() if env.get(name)}
        return cls(**values)

    def notification_config(self) -> dict:
        """NotificationClient 用の設定辞書"""
        return {"slack_webhook_url": self.slack_webhook_url}
