"""ダッシュボードデータ提供サービス"""

from typing import Dict, List, Optional, Tuple
import logging
import time
import uuid
from pydantic import BaseModel

from ..adapters.dataset_source import DatasetSource, FetchError
from ..domain.metric_registry import MetricRegistry, default_registry
from ..domain.models import ComparisonRecord, DetailRecord, Metric, RawRecord, RecipePair
from ..domain.parser import DatasetParser, DatasetParseError
from ..domain.transformer import RecordTransformer
from ..infrastructure.dataset_cache import DatasetCache
from ..infrastructure.notification_client import NotificationClient, NotificationLevel


class LoadResult(BaseModel):
    """
    ロード結果サマリー

    Attributes:
        success: ロードが成功したか
        record_count: パースしたレコード件数
        errors: エラーメッセージリスト
        user_message: 利用者向けメッセージ (失敗時のみ)
        missing_columns: ヘッダーに存在しない指標列
        execution_time_seconds: 実行時間（秒）
    """
    success: bool
    record_count: int = 0
    errors: List[str] = []
    user_message: str = ""
    missing_columns: List[str] = []
    execution_time_seconds: float = 0.0


class DashboardService:
    """
    データセットのロードと一覧/詳細データの提供

    Responsibilities:
    - 取得 → パース → キャッシュを 1 回のロードにつき 1 回だけ実行
    - キャッシュ済みレコードからの一覧・詳細データ生成 (再取得・再パースなし)
    - 一覧データの指標名ごとのメモ化 (reload() で破棄)
    - ロード失敗時のログ記録・通知・利用者向けメッセージ生成
    """

    FETCH_ERROR_MESSAGE = "Error loading data"
    PARSE_ERROR_MESSAGE = "Error parsing CSV data"

    def __init__(
        self,
        source: DatasetSource,
        cache: Optional[DatasetCache] = None,
        registry: Optional[MetricRegistry] = None,
        notification_client: Optional[NotificationClient] = None,
    ):
        """
        DashboardService を初期化

        Args:
            source: データセット取得元
            cache: データセットキャッシュ。None の場合は新規作成
            registry: 指標レジストリ。None の場合は既定のレジストリ
            notification_client: 通知クライアント。None の場合はログのみ
        """
        self.source = source
        self.cache = cache or DatasetCache()
        self.registry = registry or default_registry()
        self.transformer = RecordTransformer(self.registry)
        self.notification_client = notification_client or NotificationClient({})
        self.logger = logging.getLogger(__name__)
        self._overview_memo: Dict[str, Tuple[ComparisonRecord, ...]] = {}
        self._last_result: Optional[LoadResult] = None

    @property
    def last_result(self) -> Optional[LoadResult]:
        """直近のロード結果"""
        return self._last_result

    def load(self) -> LoadResult:
        """
        データセットをロード

        キャッシュ済みの場合は取得・パースを行わず、直近の結果を返します。

        Returns:
            LoadResult: ロード結果サマリー

        Postconditions: 成功・失敗にかかわらずキャッシュはロード済み状態
                        (失敗時は空シーケンス)
        """
        if self.cache.is_loaded:
            self.logger.debug("Dataset already loaded, using cache")
            if self._last_result is None:
                self._last_result = LoadResult(
                    success=True, record_count=len(self.cache.records())
                )
            return self._last_result

        start_time = time.time()
        execution_id = str(uuid.uuid4())
        self.logger.info(
            f"Loading dataset from {self.source.location}",
            extra={"execution_id": execution_id}
        )

        try:
            text = self.source.fetch_text()
            headers, records = DatasetParser.parse_table(text)

        except FetchError as e:
            self.logger.error(f"Fetch failed: {str(e)}", exc_info=True)
            self.notification_client.send_alert(
                NotificationLevel.ERROR,
                "Dataset fetch failed",
                {"source": self.source.location, "status_code": e.status_code, "error": str(e)}
            )
            return self._fail(str(e), self.FETCH_ERROR_MESSAGE, start_time)

        except DatasetParseError as e:
            self.logger.error(f"Parse failed: {str(e)}", exc_info=True)
            self.notification_client.send_alert(
                NotificationLevel.ERROR,
                "Dataset could not be parsed",
                {"source": self.source.location, "line": e.line_number, "error": str(e)}
            )
            return self._fail(str(e), self.PARSE_ERROR_MESSAGE, start_time)

        missing_columns = self.registry.missing_columns(headers)
        if missing_columns:
            self.logger.warning(
                f"{len(missing_columns)} metric columns missing, values default to 0",
                extra={"missing_columns": missing_columns}
            )
            self.notification_client.notify_missing_columns(missing_columns, self.source.location)

        self.cache.store(records, source=self.source.location)
        self._overview_memo.clear()

        execution_time = time.time() - start_time
        self.logger.info(
            "Dataset loaded",
            extra={
                "execution_id": execution_id,
                "record_count": len(records),
                "missing_columns_count": len(missing_columns),
                "execution_time_seconds": execution_time
            }
        )
        self._last_result = LoadResult(
            success=True,
            record_count=len(records),
            missing_columns=missing_columns,
            execution_time_seconds=execution_time
        )
        return self._last_result

    def reload(self) -> LoadResult:
        """キャッシュを破棄して再ロード"""
        self.cache.invalidate()
        self._overview_memo.clear()
        self._last_result = None
        return self.load()

    def records(self) -> Tuple[RawRecord, ...]:
        """キャッシュ済みレコード (未ロードならロードしてから返す)"""
        self._ensure_loaded()
        return self.cache.records()

    def list_metrics(self) -> List[Metric]:
        """指標選択コントロール用の指標リスト (登録順)"""
        return self.registry.list_metrics()

    def overview(self, metric_name: str, limit: Optional[int] = None) -> List[ComparisonRecord]:
        """
        1 指標分の一覧データを取得

        Args:
            metric_name: 指標名
            limit: 先頭から返す件数。None の場合は全件 (index は変わらない)

        Returns:
            List[ComparisonRecord]: データセット順の比較レコード

        Raises:
            UnknownMetricError: 未登録の指標名の場合
        """
        self.registry.get(metric_name)
        self._ensure_loaded()

        if metric_name not in self._overview_memo:
            self._overview_memo[metric_name] = tuple(
                self.transformer.to_overview(self.cache.records(), metric_name)
            )
        records = self._overview_memo[metric_name]
        return list(records[:limit] if limit is not None else records)

    def detail(self, index: int) -> Tuple[RecipePair, List[DetailRecord]]:
        """
        一覧の index に対応するレシピ対の詳細データを取得

        Args:
            index: 一覧レコードの index

        Returns:
            Tuple[RecipePair, List[DetailRecord]]: 見出し情報と指標ごとの詳細

        Raises:
            RecordNotFoundError: index に対応するレコードがない場合
        """
        self._ensure_loaded()
        record = self.transformer.select(self.cache.records(), index)
        return (
            self.transformer.to_recipe_pair(record, index),
            self.transformer.to_detail(record, index),
        )

    def _ensure_loaded(self) -> None:
        if not self.cache.is_loaded:
            self.load()

    def _fail(self, error: str, user_message: str, start_time: float) -> LoadResult:
        """
        ロード失敗時の後処理

        空シーケンスをキャッシュし、以降の一覧・詳細は空として扱います。
        """
        self.cache.store([], source=self.source.location)
        self._overview_memo.clear()
        self._last_result = LoadResult(
            success=False,
            errors=[error],
            user_message=user_message,
            execution_time_seconds=time.time() - start_time
        )
        return self._last_result
