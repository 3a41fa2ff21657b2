"""
データセットキャッシュ

パース済みの RawRecord シーケンスをプロセス内に保持します。
最初のロード成功時に格納され、明示的な invalidate() まで再取得・再パースは行いません。
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..domain.models import RawRecord


class DatasetCache:
    """
    パース済みデータセットのメモリ内キャッシュ

    一覧ビュー・詳細ビューなど複数の利用者が同じシーケンスを参照します。
    格納したシーケンスはタプルとして保持し、変更されません。
    """

    def __init__(self):
        """DatasetCache を初期化 (未ロード状態)"""
        self._records: Optional[Tuple[RawRecord, ...]] = None
        self._source: Optional[str] = None
        self._loaded_at: Optional[datetime] = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_loaded(self) -> bool:
        """ロード済みか"""
        return self._records is not None

    @property
    def source(self) -> Optional[str]:
        """格納したデータセットの取得元"""
        return self._source

    @property
    def loaded_at(self) -> Optional[datetime]:
        """格納日時 (UTC)"""
        return self._loaded_at

    def store(self, records: List[RawRecord], source: Optional[str] = None) -> None:
        """
        パース済みレコードを格納

        Args:
            records: パース済みレコード (空でも可)
            source: 取得元 (ログ用)
        """
        self._records = tuple(records)
        self._source = source
        self._loaded_at = datetime.now(timezone.utc)
        self.logger.info(
            f"Cached {len(self._records)} records",
            extra={"source": source, "record_count": len(self._records)},
        )

    def records(self) -> Tuple[RawRecord, ...]:
        """
        格納済みレコードを取得

        Returns:
            Tuple[RawRecord, ...]: 未ロードの場合は空タプル
        """
        return self._records if self._records is not None else ()

    def invalidate(self) -> None:
        """キャッシュを破棄 (次回ロード時に再取得)"""
        if self._records is not None:
            self.logger.info("Dataset cache invalidated", extra={"source": self._source})
        self._records = None
        self._source = None
        self._loaded_at = None
