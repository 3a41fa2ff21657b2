"""
インフラストラクチャ層

データセットキャッシュ、JSON 出力、運用者通知などの外部システム依存を提供します。
"""

from .dataset_cache import DatasetCache
from .output_writer import OutputWriter
from .notification_client import NotificationClient, NotificationLevel

__all__ = ["DatasetCache", "OutputWriter", "NotificationClient", "NotificationLevel"]
