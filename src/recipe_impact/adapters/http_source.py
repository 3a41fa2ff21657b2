"""
HTTP データセット取得元

公開 URL から CSV データセットを取得するアダプターです。
"""

import logging

import requests

from .dataset_source import DatasetSource, FetchError


logger = logging.getLogger(__name__)


class HttpDatasetSource(DatasetSource):
    """
    HTTP(S) 経由で CSV を取得する実装
    """

    # HTTP リクエストヘッダー
    HEADERS = {
        "User-Agent": "RecipeImpact/1.0 (Dataset Loader)",
        "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.8",
    }

    # リクエストタイムアウト（秒）
    TIMEOUT = 30

    def __init__(self, url: str, timeout: float = TIMEOUT):
        """
        Args:
            url: データセットの URL
            timeout: リクエストタイムアウト（秒）
        """
        super().__init__(url)
        self.timeout = timeout

    def fetch_text(self) -> str:
        """
        URL から CSV を取得

        サーバーが返す文字コードにかかわらず UTF-8 (BOM 付き可) としてデコードします。

        Returns:
            str: データセットの全文

        Raises:
            FetchError: HTTP エラー・ネットワークエラー・デコードエラー発生時
        """
        response = None
        try:
            response = requests.get(
                self.location,
                headers=self.HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise FetchError(
                f"HTTP エラー: {e}",
                source=self.location,
                status_code=response.status_code if response is not None else None,
            ) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(
                f"ネットワークエラー: {e}",
                source=self.location,
            ) from e

        try:
            text = response.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FetchError(
                f"UTF-8 としてデコードできません: {e}",
                source=self.location,
            ) from e

        logger.info(f"Fetched dataset from {self.location} ({len(response.content)} bytes)")
        return text
