"""CLI エントリーポイント"""

import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

from .config import AppConfig
from .adapters import create_source
from .domain.derived_values import DerivedValueEngine
from .domain.metric_registry import UnknownMetricError, default_registry
from .domain.transformer import RecordNotFoundError
from .infrastructure.dataset_cache import DatasetCache
from .infrastructure.output_writer import OutputWriter
from .infrastructure.notification_client import NotificationClient
from .orchestration.dashboard_service import DashboardService


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"1 以上を指定してください: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数の定義"""
    parser = argparse.ArgumentParser(
        prog="recipe-impact",
        description="Compare environmental-impact metrics of animal-based and plant-based recipes.",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="Dataset URL or CSV path. Default: env RECIPE_IMPACT_DATASET.",
    )
    parser.add_argument(
        "--metric",
        default=None,
        help="Metric name for the overview. Default: env RECIPE_IMPACT_DEFAULT_METRIC.",
    )
    parser.add_argument(
        "--recipe",
        type=int,
        default=None,
        help="Overview index of the recipe pair to export in detail.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for JSON exports. Default: env RECIPE_IMPACT_OUTPUT_DIR.",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Only export the first N recipe pairs in the overview.",
    )
    parser.add_argument(
        "--list-metrics",
        action="store_true",
        help="Print the available metrics and exit.",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """
    CLI エントリーポイント

    Usage:
        python -m recipe_impact [--source URL_OR_PATH] [--metric NAME] [--recipe INDEX]

    Exit codes:
        0: 成功
        1: 失敗 (ロード失敗・未登録の指標・存在しない index)
        2: 引数エラー
    """
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.from_env()
    except ValueError as e:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger(__name__).error(f"Invalid configuration: {str(e)}")
        sys.exit(1)

    # ロギング設定
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger = logging.getLogger(__name__)

    if args.list_metrics:
        for metric in default_registry().list_metrics():
            print(f"{metric.display_name} ({metric.unit})")
        sys.exit(0)

    try:
        source = create_source(args.source or config.dataset, timeout=config.http_timeout)
        service = DashboardService(
            source=source,
            cache=DatasetCache(),
            notification_client=NotificationClient(config.notification_config())
        )
        output_writer = OutputWriter(Path(args.output_dir or config.output_dir))

        result = service.load()
        if not result.success:
            logger.error(f"{result.user_message}: {', '.join(result.errors)}")
            sys.exit(1)

        metric_name = args.metric or config.default_metric
        limit = args.limit if args.limit is not None else config.overview_limit
        try:
            overview = service.overview(metric_name, limit=limit)
        except UnknownMetricError as e:
            logger.error(str(e))
            sys.exit(1)

        metric = service.registry.get(metric_name)
        overview_path = output_writer.write_overview(metric, overview)
        logger.info(
            f"Overview exported: {len(overview)} of {result.record_count} recipe pairs, "
            f"metric '{metric_name}' -> {overview_path}"
        )

        if args.recipe is not None:
            try:
                pair, details = service.detail(args.recipe)
            except RecordNotFoundError as e:
                logger.error(str(e))
                sys.exit(1)

            for detail in details:
                logger.info(
                    f"{detail.metric_name}: "
                    f"animal {DerivedValueEngine.format_value(detail.animal_value, detail.unit)}, "
                    f"plant {DerivedValueEngine.format_value(detail.plant_value, detail.unit)}, "
                    f"reduction {detail.reduction_label}"
                )
            excluded = len(details) - len(DerivedValueEngine.radial_points(details))
            if excluded:
                logger.warning(f"{excluded} metrics unavailable for the radial view (non-positive values)")

            detail_path = output_writer.write_detail(pair, details)
            logger.info(f"Detail exported: '{pair.animal_recipe}' vs '{pair.plant_recipe}' -> {detail_path}")

        sys.exit(0)

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
