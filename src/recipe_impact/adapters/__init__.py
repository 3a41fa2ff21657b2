"""
アダプター層

データセットのテキスト取得 (HTTP・ローカルファイル) を提供します。
"""

from .dataset_source import DatasetSource, FetchError
from .http_source import HttpDatasetSource
from .file_source import FileDatasetSource


def create_source(location: str, timeout: float = HttpDatasetSource.TIMEOUT) -> DatasetSource:
    """
    取得元の文字列から DatasetSource を生成

    "http://" / "https://" で始まる場合は HTTP、それ以外はローカルファイルとして扱います。
    """
    if location.startswith(("http://", "https://")):
        return HttpDatasetSource(location, timeout=timeout)
    return FileDatasetSource(location)


__all__ = [
    "DatasetSource",
    "FetchError",
    "HttpDatasetSource",
    "FileDatasetSource",
    "create_source",
]
