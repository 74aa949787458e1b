"""命令行聚合器入口: gator-agg <间隔>."""

import asyncio
import logging
import signal
import sys

from gator.config import Settings, get_settings
from gator.models.database import async_session_maker, close_db, init_db
from gator.scheduler import create_poller, create_scrape_service
from gator.utils.duration import InvalidDurationFormat, parse_duration

logger = logging.getLogger(__name__)

USAGE = "用法: gator-agg <time_between_reqs>\n示例: gator-agg 1m"


async def run_aggregator(settings: Settings, period_ms: int) -> None:
    """启动定时抓取，直到收到 SIGINT / SIGTERM."""
    await init_db(settings.database_url)
    service = create_scrape_service(settings, async_session_maker())
    poller = create_poller(settings, service, period_ms)

    loop = asyncio.get_running_loop()
    signals = (signal.SIGINT, signal.SIGTERM)
    for sig in signals:
        loop.add_signal_handler(sig, poller.stop)

    poller.start()
    try:
        await poller.wait_stopped()
        logger.info("正在关闭 Feed 聚合器...")
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)
        poller.stop()
        await service.fetcher.close()
        await close_db()


def main(argv: list[str] | None = None) -> int:
    """解析间隔并运行，返回退出码."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    # 间隔无效时不启动调度器
    try:
        period_ms = parse_duration(args[0])
    except InvalidDurationFormat as e:
        logger.error(str(e))
        print(USAGE, file=sys.stderr)
        return 1

    if period_ms <= 0:
        logger.error(f"抓取间隔必须大于 0: {args[0]}")
        return 1

    asyncio.run(run_aggregator(get_settings(), period_ms))
    return 0


def cli() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(main())


if __name__ == "__main__":
    cli()
