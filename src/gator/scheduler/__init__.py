"""定时任务."""

from gator.scheduler.poller import FeedPoller
from gator.scheduler.tasks import create_poller, create_scrape_service

__all__ = [
    "FeedPoller",
    "create_poller",
    "create_scrape_service",
]
