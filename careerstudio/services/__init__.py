# Services module
from .job_feed import JobFeed, JobFeedState, SqlJobFeed, StaticJobFeed, load_job_feed
from .renderer import HostContext, RenderedPage, extract_youtube_id, render_page
from .storage import StorageService, get_storage_service

__all__ = [
    "JobFeed",
    "JobFeedState",
    "SqlJobFeed",
    "StaticJobFeed",
    "load_job_feed",
    "HostContext",
    "RenderedPage",
    "extract_youtube_id",
    "render_page",
    "StorageService",
    "get_storage_service",
]
