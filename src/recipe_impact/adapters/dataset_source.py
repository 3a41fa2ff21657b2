"""
データセット取得元の抽象基底クラス

データセットのテキスト取得 (HTTP・ローカルファイルなど) を統一的に扱うための
抽象インターフェースを定義します。パース処理はドメイン層が担当します。
"""

from abc import ABC, abstractmethod
from typing import Optional


class FetchError(Exception):
    """
    取得エラー例外

    HTTP エラー、接続タイムアウト、ファイル読み込み失敗など、
    データセットのテキストを取得できなかった場合を表します。
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        """
        Args:
            message: エラーメッセージ
            source: 取得元 (URL またはファイルパス)
            status_code: HTTP ステータスコード（該当する場合）
        """
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class DatasetSource(ABC):
    """
    データセット取得元の抽象基底クラス

    取得は 1 回のロードにつき 1 回だけ呼ばれ、結果は呼び出し側でキャッシュされます。
    """

    def __init__(self, location: str):
        """
        Args:
            location: 取得元 (URL またはファイルパス)
        """
        self.location = location

    @abstractmethod
    def fetch_text(self) -> str:
        """
        データセットの全文を取得

        Returns:
            str: UTF-8 でデコードしたテキスト

        Raises:
            FetchError: 取得に失敗した場合
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.location!r})"
