"""ローカルファイルのデータセット取得元"""

import logging
from pathlib import Path
from typing import Union

from .dataset_source import DatasetSource, FetchError


logger = logging.getLogger(__name__)


class FileDatasetSource(DatasetSource):
    """ローカルの CSV ファイルを読み込む実装"""

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: CSV ファイルのパス
        """
        self.path = Path(path)
        super().__init__(str(self.path))

    def fetch_text(self) -> str:
        """
        ファイルを UTF-8 で読み込み

        先頭の BOM は取り除きます。

        Raises:
            FetchError: ファイルが存在しない・読み込めない・UTF-8 でない場合
        """
        try:
            with open(self.path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(
                f"ファイルを読み込めません: {e}",
                source=self.location,
            ) from e

        logger.info(f"Read dataset from {self.path} ({len(text)} chars)")
        return text
