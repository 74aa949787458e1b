"""抓取 API."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from gator.api.deps import get_poller, get_scrape_service
from gator.core.scrape import ScrapeService
from gator.scheduler.poller import FeedPoller
from gator.utils.duration import format_duration

router = APIRouter(prefix="/api/scrape", tags=["scrape"])


@router.post("")
async def trigger_scrape(
    service: ScrapeService = Depends(get_scrape_service),
) -> dict:
    """立即执行一次抓取周期."""
    result = await service.scrape_next_feed()
    return {"success": result.success, **asdict(result)}


@router.get("/status")
async def get_scrape_status(
    poller: FeedPoller | None = Depends(get_poller),
) -> dict:
    """定时抓取状态."""
    if poller is None:
        return {"enabled": False, "running": False}

    return {
        "enabled": True,
        "running": poller.is_running,
        "interval": format_duration(poller.period_ms),
        "allow_overlap": poller.allow_overlap,
        "ticks_started": poller.ticks_started,
        "ticks_skipped": poller.ticks_skipped,
    }
