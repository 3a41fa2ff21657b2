"""
データセットパーサー

カンマ区切りテキストを RawRecord の順序付きリストに変換します。
1 行目をヘッダーとし、各値に数値変換を試みて、失敗した場合は文字列のまま保持します。
I/O は行わず、同じ入力には常に同じ出力を返します。
"""

import csv
import logging
import math
from typing import List, Optional, Tuple

from .models import FieldValue, RawRecord


logger = logging.getLogger(__name__)


class DatasetParseError(Exception):
    """
    パースエラー例外

    入力テキストが空、またはヘッダー行から列名を取得できない場合など、
    行として解釈できないデータを表します。
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        """
        Args:
            message: エラーメッセージ
            line_number: エラーが発生した行番号 (1 始まり、該当する場合)
        """
        super().__init__(message)
        self.line_number = line_number


class DatasetParser:
    """
    CSV パーサー

    ヘッダー行の列名と各行の値を位置で対応付け、RawRecord を生成します。
    列ごとのスキーマは持たず、型変換ルールは全列に一律に適用されます。
    """

    DELIMITER = ","

    @staticmethod
    def parse(text: str) -> List[RawRecord]:
        """
        テキスト全体を RawRecord のリストに変換

        Args:
            text: データセットの全文 (1 行目がヘッダー)

        Returns:
            List[RawRecord]: ヘッダー以外の空でない行ごとのレコード (行順)

        Raises:
            DatasetParseError: テキストが空、またはヘッダーに列名がない場合
        """
        _, records = DatasetParser.parse_table(text)
        return records

    @staticmethod
    def parse_table(text: str) -> Tuple[List[str], List[RawRecord]]:
        """
        ヘッダーの列名とレコードを合わせて返す

        レコードが 0 件の場合も、ヘッダーの列名は返します。

        Returns:
            Tuple[List[str], List[RawRecord]]: ヘッダー順の列名とレコード

        Raises:
            DatasetParseError: テキストが空、またはヘッダーに列名がない場合
        """
        # 行区切りは \n のみ (U+2028 などは値の一部として扱う)
        lines = [line.rstrip("\r") for line in text.lstrip("\ufeff").split("\n")]

        # 先頭の空行はスキップしてヘッダーを探す
        header_index = next(
            (i for i, line in enumerate(lines) if line.strip()), None
        )
        if header_index is None:
            raise DatasetParseError("データセットが空です")

        headers = [
            name.strip()
            for name in DatasetParser._split_line(lines[header_index], header_index + 1)
        ]
        if not any(headers):
            raise DatasetParseError(
                "ヘッダー行に列名がありません", line_number=header_index + 1
            )
        if len(set(headers)) != len(headers):
            logger.warning(
                "Duplicate column names in header, later columns win",
                extra={"headers": headers},
            )

        records = []
        for offset, line in enumerate(lines[header_index + 1:], start=header_index + 2):
            # 空行・空白のみの行 (末尾の改行など) はレコードにしない
            if not line.strip():
                continue

            values = DatasetParser._split_line(line, offset)
            if len(values) > len(headers):
                logger.warning(
                    f"Line {offset} has {len(values)} values for {len(headers)} columns, "
                    f"dropping the surplus"
                )

            data = {}
            raw_text = {}
            for position, header in enumerate(headers):
                raw_value = values[position] if position < len(values) else None
                value = DatasetParser.coerce_value(raw_value)
                data[header] = value
                if isinstance(value, float):
                    raw_text[header] = raw_value
                else:
                    raw_text.pop(header, None)
            records.append(RawRecord(data=data, raw_text=raw_text))

        logger.debug(f"Parsed {len(records)} records with {len(headers)} columns")
        return headers, records

    @staticmethod
    def coerce_value(raw_value: Optional[str]) -> FieldValue:
        """
        値の型変換

        数値として解釈でき、NaN でなければ float を、それ以外は元の文字列を返します。
        None (行が途中で切れている場合) はそのまま返します。

        Args:
            raw_value: 分割後の値

        Returns:
            FieldValue: float / str / None
        """
        if raw_value is None:
            return None
        try:
            number = float(raw_value)
        except ValueError:
            return raw_value
        if math.isnan(number):
            return raw_value
        return number

    @staticmethod
    def _split_line(line: str, line_number: int) -> List[str]:
        """
        1 行をカンマで分割

        ダブルクォートで囲まれた値 (例: "Soup, hearty") は 1 つの値として扱います。

        Raises:
            DatasetParseError: クォートが不正な場合
        """
        try:
            return next(csv.reader([line], delimiter=DatasetParser.DELIMITER, strict=True))
        except csv.Error as e:
            raise DatasetParseError(
                f"{line_number} 行目を解釈できません: {e}", line_number=line_number
            ) from e
