"""運用者通知クライアント"""

from typing import Dict, Any, List
from enum import Enum
import logging

import requests


class NotificationLevel(str, Enum):
    """通知レベル"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class NotificationClient:
    """
    データセットのロード失敗・データ品質の問題を運用者へ通知

    Responsibilities:
    - ロード失敗 (取得エラー・パースエラー) のアラート送信
    - 指標列の欠損 (値が 0 として扱われる) の通知
    - 通知先の設定管理（Slack webhook 未設定時はログのみ）
    """

    def __init__(self, notification_config: Dict[str, Any]):
        """
        NotificationClient を初期化

        Args:
            notification_config: 通知先設定（slack_webhook_url など）
        """
        self.config = notification_config
        self.logger = logging.getLogger(__name__)

    @property
    def webhook_url(self) -> str:
        return self.config.get("slack_webhook_url") or ""

    def send_alert(
        self,
        level: NotificationLevel,
        message: str,
        details: Dict[str, Any]
    ) -> None:
        """
        運用者にアラートを送信

        Args:
            level: 通知レベル
            message: 通知メッセージ
            details: 詳細情報（取得元、エラー内容等）

        Note: 通知失敗時はログ記録のみで処理継続（例外をスローしない）
        """
        try:
            if self.webhook_url:
                self._post_slack(self._format_alert(level, message, details))
                self.logger.info(f"Alert sent to Slack: {level.value} - {message}")
            else:
                self.logger.warning(
                    f"No notification channel configured. Alert: {level.value} - {message}"
                )
        except Exception as e:
            # best-effort: 通知失敗時はログ記録のみ（ロード処理自体は継続）
            self.logger.error(
                f"Failed to send alert: {str(e)}",
                exc_info=True
            )

    def notify_missing_columns(self, missing_columns: List[str], source: str) -> None:
        """
        指標列の欠損を通知

        Args:
            missing_columns: ヘッダーに存在しない指標列
            source: データセットの取得元

        Note: 空リストの場合は通知しない
        """
        if not missing_columns:
            return

        details: Dict[str, Any] = {"source": source, "count": len(missing_columns)}
        for number, column in enumerate(missing_columns[:5], start=1):  # 最大5件まで詳細表示
            details[f"column {number}"] = column
        if len(missing_columns) > 5:
            details["others"] = f"... 他 {len(missing_columns) - 5}件"

        self.send_alert(
            NotificationLevel.WARNING,
            "Metric columns missing from dataset, values default to 0",
            details
        )

    def _format_alert(
        self,
        level: NotificationLevel,
        message: str,
        details: Dict[str, Any]
    ) -> str:
        """Slack メッセージフォーマット"""
        text = f"[{level.value.upper()}] {message}\n"
        for key, value in details.items():
            text += f"- {key}: {value}\n"
        return text

    def _post_slack(self, text: str) -> None:
        """Slack webhook に送信"""
        response = requests.post(self.webhook_url, json={"text": text}, timeout=10)
        response.raise_for_status()
